# pageimages/denylist/sources.py
# Responsibility: Describes denylist sources and fetches the file names each one contributes.

import re
from typing import List, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel, ConfigDict

from pageimages.errors import SourceUnavailable
from pageimages.services.db import DBTransaction
from pageimages.titles import NS_FILE, TitleNormalizer

KIND_DATABASE = "database"
KIND_REMOTE_URL = "remoteUrl"

# Spellings accepted from older configuration files
KIND_ALIASES = {
    "db": KIND_DATABASE,
    "url": KIND_REMOTE_URL,
}


class DenylistSource(BaseModel):
    """
    One place to read blocked file names from.

    kind: "database" (locator is a page title whose file links are blocked) or
          "remoteUrl" (locator is a URL returning raw wiki text).
    database: DSN of another wiki database for "database" sources; None means the local one.
    """
    kind: str
    locator: str
    database: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def normalized_kind(self) -> str:
        return KIND_ALIASES.get(self.kind, self.kind)


class DenylistSourceConfig(BaseModel):
    sources: Tuple[DenylistSource, ...] = ()
    ttl_seconds: int = 900
    cache_key: str = "pageimages-denylist"
    remote_timeout: float = 3.0
    user_agent: str = "PageImagesBot/1.0"
    file_extensions: Tuple[str, ...] = ("png", "gif", "jpg", "jpeg", "webp")

    model_config = ConfigDict(frozen=True)


class DatabaseDenylistSource:
    """
    Reads the file links of a denylist page straight from the link tables.
    Database errors propagate; the storage layer owns timeouts and retries.
    """

    def __init__(self, transaction=DBTransaction):
        self.transaction = transaction

    def fetch(self, source: DenylistSource) -> List[str]:
        split = TitleNormalizer.split_title(source.locator)
        if split is None:
            print(f"[Denylist] Invalid denylist page title: {source.locator!r}")
            return []

        namespace, db_key = split
        with self.transaction(source.database) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT page_id FROM page WHERE page_namespace = %s AND page_title = %s",
                    (namespace, db_key)
                )
                row = cur.fetchone()
                if not row:
                    print(f"[Denylist] Denylist page does not exist: {source.locator}")
                    return []

                cur.execute(
                    "SELECT pl_title FROM pagelinks WHERE pl_from = %s AND pl_namespace = %s",
                    (row[0], NS_FILE)
                )
                return [link[0] for link in cur.fetchall()]


class RemoteDenylistSource:
    """
    Fetches raw wiki text from a URL and extracts the files it links to ([[:File:Foo.jpg]]).
    Not bulletproof against localised namespace names, which is acceptable for curated lists.
    """

    def __init__(
        self,
        file_extensions: Sequence[str],
        timeout: float = 3.0,
        user_agent: str = "PageImagesBot/1.0",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}
        self.transport = transport
        extensions = '|'.join(re.escape(ext) for ext in file_extensions)
        self.pattern = re.compile(r'\[\[:([^|#]*?\.(?:' + extensions + r'))', re.IGNORECASE)

    def fetch(self, source: DenylistSource) -> List[str]:
        return self.extract(self.fetch_text(source.locator))

    def fetch_text(self, url: str) -> str:
        """
        Raises:
            SourceUnavailable: On timeout, transport error or a non-2xx response.
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url, headers=self.headers, follow_redirects=True)
                response.raise_for_status()
                return response.text
        except httpx.TimeoutException as e:
            raise SourceUnavailable(url, f"timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceUnavailable(url, f"network error: {e}") from e

    def extract(self, text: str) -> List[str]:
        if not text:
            return []

        names = []
        for match in self.pattern.findall(text):
            db_key = TitleNormalizer.file_db_key(match)
            if db_key:
                names.append(db_key)
        return names
