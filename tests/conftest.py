from typing import Any, Dict, Optional, Set

import pytest

from pageimages.denylist.sources import DenylistSourceConfig
from pageimages.scoring.score_table import ScoreTable
from pageimages.scoring.scorer import PageImagesConfig, ScoreConfig
from pageimages.services.file_repository import FileRecord, FileRepository


class FakeFileRepository(FileRepository):
    """In-memory file store: every name is known unless listed as missing."""

    def __init__(self, non_free: Optional[Set[str]] = None, missing: Optional[Set[str]] = None):
        self.non_free = non_free or set()
        self.missing = missing or set()
        self.lookups = []

    def find_file(self, name: str) -> Optional[FileRecord]:
        self.lookups.append(name)
        if name in self.missing:
            return None
        return FileRecord(name=name)

    def extended_metadata(self, file: FileRecord) -> Dict[str, Dict[str, Any]]:
        if file.name in self.non_free:
            return {"NonFree": {"value": "1"}}
        return {"NonFree": {"value": "0"}, "License": {"value": "cc-by-sa-4.0"}}


@pytest.fixture
def score_config() -> ScoreConfig:
    # Tables from the documented worked example
    return ScoreConfig(
        standalone_width=ScoreTable({200: 1, 500: 5, 100000: 10}),
        gallery_width=ScoreTable({200: 1, 500: 3, 100000: 8}),
        position_index={0: 2, 1: 1, 2: 0},
        aspect_ratio_tenths=ScoreTable({0: 0, 20: 1, 100: 3}),
    )


@pytest.fixture
def page_images_config(score_config) -> PageImagesConfig:
    return PageImagesConfig(score=score_config, denylist=DenylistSourceConfig())


@pytest.fixture
def make_file_repository():
    return FakeFileRepository
