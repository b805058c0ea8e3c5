import pytest
from pydantic import ValidationError

from pageimages.denylist.sources import DenylistSource
from pageimages.scoring.candidate import ImageCandidate
from pageimages.scoring.image_selector import SelectionResult
from pageimages.scoring.scorer import DENYLISTED_SCORE, CandidateScorer


def test_worked_example_scores(score_config):
    scorer = CandidateScorer(score_config)

    a_lead = ImageCandidate(file_name="A.jpg", standalone_width=600, full_width=600, full_height=400)
    b_gallery = ImageCandidate(file_name="B.jpg", full_width=300, full_height=300)
    a_small = ImageCandidate(file_name="A.jpg", standalone_width=100, full_width=100, full_height=50)

    # 10 (width) + 2 (position) + 1 (ratio 15 -> bound 20)
    assert scorer.score(a_lead, 0, frozenset()) == 13.0
    # 3 (gallery width) + 1 (position) + 1 (ratio 10 -> bound 20)
    assert scorer.score(b_gallery, 1, frozenset()) == 5.0
    # 1 (width) + 0 (position) + 1 (ratio 20 -> bound 20)
    assert scorer.score(a_small, 2, frozenset()) == 2.0


def test_positions_outside_table_contribute_nothing(score_config):
    scorer = CandidateScorer(score_config)
    candidate = ImageCandidate(file_name="C.jpg", standalone_width=600, full_width=600, full_height=400)

    assert scorer.score(candidate, 2, frozenset()) == scorer.score(candidate, 57, frozenset())
    assert scorer.score(candidate, 0, frozenset()) - scorer.score(candidate, 57, frozenset()) == 2.0


def test_zero_standalone_width_is_scored_as_gallery_image(score_config):
    scorer = CandidateScorer(score_config)
    candidate = ImageCandidate(file_name="C.jpg", standalone_width=0, full_width=150, full_height=0)

    # gallery width 150 -> 1, position 5 -> 0, unknown height -> ratio 0 -> 0
    assert scorer.score(candidate, 5, frozenset()) == 1.0


def test_denylisted_file_is_forced_negative(score_config):
    scorer = CandidateScorer(score_config)
    denylist = frozenset({"Blocked.png"})

    for width, height, position in [(600, 400, 0), (50, 5000, 1), (0, 0, 9)]:
        candidate = ImageCandidate(
            file_name="Blocked.png", standalone_width=width or None, full_width=width, full_height=height
        )
        assert scorer.score(candidate, position, denylist) == DENYLISTED_SCORE == -1000


def test_candidate_from_renderer_dict():
    candidate = ImageCandidate.from_dict(
        {"filename": "Foo.jpg", "handlerWidth": 220, "fullwidth": 1024, "fullheight": 768}
    )

    assert candidate == ImageCandidate(file_name="Foo.jpg", standalone_width=220, full_width=1024, full_height=768)
    assert ImageCandidate.from_dict({"filename": "Bar.jpg", "fullwidth": 10}).is_standalone is False


def test_non_finite_position_bonus_counts_as_zero(score_config):
    config = score_config.model_copy(update={"position_index": {0: "nan"}})
    scorer = CandidateScorer(config)
    candidate = ImageCandidate(file_name="A.jpg", standalone_width=600, full_width=600, full_height=400)

    # 10 (width) + 0 (broken position bonus) + 1 (ratio)
    assert scorer.score(candidate, 0, frozenset()) == 11.0


def test_value_models_are_frozen(score_config):
    candidate = ImageCandidate(file_name="A.jpg")

    for model in (candidate, score_config, SelectionResult(), DenylistSource(kind="db", locator="A")):
        assert model.model_config["frozen"] is True

    with pytest.raises(ValidationError):
        candidate.file_name = "B.jpg"
