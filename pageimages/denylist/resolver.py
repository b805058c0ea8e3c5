# pageimages/denylist/resolver.py
# Responsibility: Merges all configured denylist sources into one cached set of file names.

from typing import FrozenSet, List, Optional

from pageimages.denylist.sources import (
    KIND_DATABASE,
    KIND_REMOTE_URL,
    DatabaseDenylistSource,
    DenylistSource,
    DenylistSourceConfig,
    RemoteDenylistSource,
)
from pageimages.errors import ConfigurationError, SourceUnavailable
from pageimages.services.cache import ComputeCache, create_cache


class DenylistResolver:
    """
    Builds the denylist from its sources at most once per TTL window per cache key.

    A source that cannot be reached contributes nothing; an unknown source kind aborts
    the whole computation with ConfigurationError.
    """

    def __init__(
        self,
        config: DenylistSourceConfig,
        cache: ComputeCache,
        database_source: Optional[DatabaseDenylistSource] = None,
        remote_source: Optional[RemoteDenylistSource] = None,
    ):
        self.config = config
        self.cache = cache
        self.database_source = database_source or DatabaseDenylistSource()
        self.remote_source = remote_source or RemoteDenylistSource(
            file_extensions=config.file_extensions,
            timeout=config.remote_timeout,
            user_agent=config.user_agent,
        )

    def resolve(self) -> FrozenSet[str]:
        names = self.cache.get_or_compute(
            self.config.cache_key,
            self.config.ttl_seconds,
            self.compute,
        )
        return frozenset(names)

    def purge(self) -> None:
        """Drops the cached set so the next caller rebuilds it."""
        self.cache.delete(self.config.cache_key)

    def compute(self) -> List[str]:
        """
        Reads every source in configured order.

        Returns:
            List[str]: Sorted, de-duplicated file names (JSON-friendly for shared caches).
        """
        collected: List[str] = []
        for source in self.config.sources:
            collected.extend(self._fetch_source(source))

        names = sorted(set(collected))
        print(f"[Denylist] Rebuilt denylist from {len(self.config.sources)} source(s): {len(names)} file(s)")
        return names

    def _fetch_source(self, source: DenylistSource) -> List[str]:
        kind = source.normalized_kind
        if kind == KIND_DATABASE:
            return self.database_source.fetch(source)

        if kind == KIND_REMOTE_URL:
            try:
                return self.remote_source.fetch(source)
            except SourceUnavailable as e:
                print(f"[Denylist] Skipping source: {e}")
                return []

        raise ConfigurationError(f"unrecognized image denylist type '{source.kind}'")


def resolve_denylist(config: DenylistSourceConfig, cache: Optional[ComputeCache] = None) -> FrozenSet[str]:
    """Convenience entry point for hosts that do not keep a resolver around."""
    return DenylistResolver(config, cache or create_cache()).resolve()
