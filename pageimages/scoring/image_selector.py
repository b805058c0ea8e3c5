# pageimages/scoring/image_selector.py
# Responsibility: Determines the best overall and the best free representative image for a page.

from typing import AbstractSet, Callable, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from pageimages.scoring.candidate import ImageCandidate
from pageimages.scoring.scorer import CandidateScorer, ScoreConfig


class SelectionResult(BaseModel):
    best_overall: Optional[str] = None
    best_free: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def page_properties(self, free_prop_name: str, prop_name: str) -> Dict[str, str]:
        """
        Maps the result to the page properties to store.

        The free winner is always stored when present. The overall winner is stored only
        when it differs from the free one; otherwise it would just repeat it.
        """
        properties = {}
        if self.best_free:
            properties[free_prop_name] = self.best_free
        if self.best_overall and self.best_overall != self.best_free:
            properties[prop_name] = self.best_overall
        return properties


class ImageSelector:
    """
    Encapsulates logic for selecting a page's representative images.

    Candidates are scored in page order, folded per file name (max score, first-seen order),
    then scanned once: strictly greater scores replace the current winner, so the earliest
    file wins ties.
    """

    def __init__(self, scorer: CandidateScorer, is_free: Callable[[str], bool]):
        self.scorer = scorer
        self.is_free = is_free

    def select(self, candidates: Iterable[ImageCandidate], denylist: AbstractSet[str]) -> SelectionResult:
        scores = self.aggregate_scores(candidates, denylist)
        return self.pick_winners(scores, self.is_free)

    def aggregate_scores(self, candidates: Iterable[ImageCandidate], denylist: AbstractSet[str]) -> Dict[str, float]:
        """
        Returns:
            Dict[str, float]: file name -> best score seen, in order of first appearance.
        """
        scores: Dict[str, float] = {}
        for position, candidate in enumerate(candidates):
            score = self.scorer.score(candidate, position, denylist)
            name = candidate.file_name
            if name not in scores or score > scores[name]:
                scores[name] = score
        return scores

    @staticmethod
    def pick_winners(scores: Dict[str, float], is_free: Callable[[str], bool]) -> SelectionResult:
        """
        Args:
            scores (Dict[str, float]): Aggregated scores, iterated in insertion order.
            is_free (Callable[[str], bool]): Freeness check; only called for files that would
                beat the current free winner.
        """
        best_overall: Optional[str] = None
        best_free: Optional[str] = None

        for name, score in scores.items():
            if score <= 0:
                continue

            if best_overall is None or score > scores[best_overall]:
                best_overall = name

            if (best_free is None or score > scores[best_free]) and is_free(name):
                best_free = name

        return SelectionResult(best_overall=best_overall, best_free=best_free)


def compute_selection(
    candidates: Iterable[ImageCandidate],
    config: ScoreConfig,
    denylist: AbstractSet[str],
    is_free: Callable[[str], bool],
) -> SelectionResult:
    """Scores and selects in one call; the host decides when to call it and what to persist."""
    return ImageSelector(CandidateScorer(config), is_free).select(candidates, denylist)
