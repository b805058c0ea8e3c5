# pageimages/services/page_images_service.py
# Responsibility: Orchestrates lead image selection for a page (Denylist -> Score -> Select -> Persist).

from functools import lru_cache
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from pageimages.config.settings import settings
from pageimages.denylist.resolver import DenylistResolver
from pageimages.scoring.candidate import ImageCandidate
from pageimages.scoring.freeness import FreenessOracle
from pageimages.scoring.image_selector import ImageSelector, SelectionResult
from pageimages.scoring.scorer import CandidateScorer, PageImagesConfig
from pageimages.services.cache import ComputeCache, create_cache
from pageimages.services.file_repository import DatabaseFileRepository, FileRepository
from pageimages.services.page_props import PagePropsRepository

CandidateInput = Union[ImageCandidate, Dict[str, Any]]


class PageImagesService:
    """
    Main service class for page image selection.
    Integrates the resolver, scorer, freeness oracle and property storage.
    """

    def __init__(
        self,
        config: Optional[PageImagesConfig] = None,
        cache: Optional[ComputeCache] = None,
        file_repository: Optional[FileRepository] = None,
        props: Optional[PagePropsRepository] = None,
        resolver: Optional[DenylistResolver] = None,
    ):
        self.config = config or settings.PAGEIMAGES.to_config()
        self.resolver = resolver or DenylistResolver(self.config.denylist, cache or create_cache())
        self.oracle = FreenessOracle(file_repository or DatabaseFileRepository())
        self.selector = ImageSelector(CandidateScorer(self.config.score), self.oracle.is_free)
        self.props = props or PagePropsRepository((self.config.free_prop_name, self.config.prop_name))

    def get_denylist(self) -> FrozenSet[str]:
        return self.resolver.resolve()

    def select(self, candidates: Iterable[CandidateInput]) -> SelectionResult:
        """Computes the winners without persisting anything."""
        parsed = self._parse_candidates(candidates)
        if not parsed:
            return SelectionResult()
        return self.selector.select(parsed, self.get_denylist())

    def page_properties(self, result: SelectionResult) -> Dict[str, str]:
        return result.page_properties(self.config.free_prop_name, self.config.prop_name)

    def process_page(self, page_id: int, candidates: Iterable[CandidateInput]) -> SelectionResult:
        """
        Selects and stores the page image properties of one page.
        A page without candidates ends up with no page image properties.
        """
        result = self.select(candidates)
        properties = self.page_properties(result)
        self.props.replace_page_images(page_id, properties)
        print(f"[PageImages] Page {page_id}: stored {properties or 'no page images'}")
        return result

    @staticmethod
    def _parse_candidates(candidates: Iterable[CandidateInput]) -> List[ImageCandidate]:
        return [
            c if isinstance(c, ImageCandidate) else ImageCandidate.from_dict(c)
            for c in candidates
        ]


@lru_cache()
def get_page_images_service() -> PageImagesService:
    """Dependency injection provider for PageImagesService."""
    return PageImagesService()
