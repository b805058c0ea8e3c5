# pageimages/scoring/scorer.py
# Responsibility: Computes the composite score of one image candidate.

from typing import AbstractSet, Any, Dict

from pydantic import BaseModel, ConfigDict

from pageimages.denylist.sources import DenylistSourceConfig
from pageimages.scoring.candidate import ImageCandidate
from pageimages.scoring.score_table import ScoreTable, coerce_score

# Forced score for denylisted files; far below anything the tables can produce.
DENYLISTED_SCORE = -1000.0


class ScoreConfig(BaseModel):
    standalone_width: ScoreTable
    gallery_width: ScoreTable
    # Exact position -> bonus; positions not listed contribute nothing.
    position_index: Dict[int, Any]
    aspect_ratio_tenths: ScoreTable

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class PageImagesConfig(BaseModel):
    """Everything the selection core needs, fixed at load time."""
    score: ScoreConfig
    denylist: DenylistSourceConfig
    free_prop_name: str = "page_image_free"
    prop_name: str = "page_image"

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class CandidateScorer:
    """
    Scores candidates against the configured tables.
    The higher the better; a score <= 0 means the image must not represent the page.
    """

    def __init__(self, config: ScoreConfig):
        self.config = config

    def score(self, candidate: ImageCandidate, position: int, denylist: AbstractSet[str]) -> float:
        """
        Args:
            candidate (ImageCandidate): The image to score.
            position (int): Zero-based order of appearance on the page.
            denylist (AbstractSet[str]): File names that may never be chosen.

        Returns:
            float: width score + position score + aspect ratio score, or DENYLISTED_SCORE.
        """
        if candidate.file_name in denylist:
            return DENYLISTED_SCORE

        if candidate.is_standalone:
            total = self.config.standalone_width.evaluate(candidate.standalone_width)
        else:
            total = self.config.gallery_width.evaluate(candidate.full_width)

        if position in self.config.position_index:
            total += coerce_score(self.config.position_index[position], source="ScoreConfig")

        ratio_tenths = int(self.aspect_ratio(candidate) * 10)
        total += self.config.aspect_ratio_tenths.evaluate(ratio_tenths)

        return total

    @staticmethod
    def aspect_ratio(candidate: ImageCandidate) -> float:
        """Width/height of the full image, or 0 when either dimension is unknown."""
        if not candidate.full_width or not candidate.full_height:
            return 0
        return candidate.full_width / candidate.full_height
