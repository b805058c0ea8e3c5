# pageimages/scoring/score_table.py
# Responsibility: Step-function lookup from a numeric measurement to a score contribution.

import math
from typing import Any, List, Mapping, Tuple

from pageimages.errors import ConfigurationError


def coerce_score(score: Any, source: str = "ScoreTable") -> float:
    """
    Converts a configured score value to float.
    Non-numeric values (including "nan" and "inf") are a configuration defect:
    warn and count them as 0.0.
    """
    try:
        value = float(score) if isinstance(score, (bool, int, float)) else float(str(score).strip())
    except (TypeError, ValueError, OverflowError):
        value = None

    if value is None or not math.isfinite(value):
        print(f"[{source}] WARNING: score tables must only contain numeric values, got {score!r}")
        return 0.0
    return value


class ScoreTable:
    """
    Ascending upper-bound table.

    The first bound that is >= the measured value decides the score; values above every
    bound get the score of the greatest bound. Entries are sorted on construction, so the
    order they were configured in does not matter.
    """

    def __init__(self, entries: Mapping[Any, Any]):
        if not entries:
            raise ConfigurationError("Score table must contain at least one entry")

        bounds: List[Tuple[float, Any]] = []
        for bound, score in entries.items():
            try:
                bounds.append((float(bound), score))
            except (TypeError, ValueError):
                raise ConfigurationError(f"Score table bound is not numeric: {bound!r}")

        self._entries: Tuple[Tuple[float, Any], ...] = tuple(sorted(bounds, key=lambda e: e[0]))

    @property
    def entries(self) -> Tuple[Tuple[float, Any], ...]:
        return self._entries

    def evaluate(self, value: float) -> float:
        last_score = None
        for upper_bound, score in self._entries:
            last_score = score
            if value <= upper_bound:
                break

        return coerce_score(last_score)

    def __repr__(self) -> str:
        return f"ScoreTable({dict(self._entries)!r})"


def evaluate(table: ScoreTable, value: float) -> float:
    """Functional alias for ``table.evaluate(value)``."""
    return table.evaluate(value)
