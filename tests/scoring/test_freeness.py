from unittest.mock import MagicMock

from pageimages.scoring.freeness import FreenessOracle, is_flag_set
from pageimages.services.file_repository import FileRecord


def test_free_and_non_free_files(make_file_repository):
    oracle = FreenessOracle(make_file_repository(non_free={"Logo.png"}))

    assert oracle.is_free("Photo.jpg") is True
    assert oracle.is_free("Logo.png") is False


def test_missing_file_counts_as_free(make_file_repository):
    oracle = FreenessOracle(make_file_repository(missing={"Gone.jpg"}))

    assert oracle.is_free("Gone.jpg") is True


def test_file_without_metadata_is_free():
    repository = MagicMock()
    repository.find_file.return_value = FileRecord(name="Plain.jpg")
    repository.extended_metadata.return_value = {}

    assert FreenessOracle(repository).is_free("Plain.jpg") is True


def test_flag_values():
    assert is_flag_set("1") is True
    assert is_flag_set(True) is True
    assert is_flag_set(1) is True

    assert is_flag_set("0") is False
    assert is_flag_set("") is False
    assert is_flag_set(None) is False
    assert is_flag_set(0) is False
    assert is_flag_set([]) is False


def test_bare_non_free_values_are_understood():
    repository = MagicMock()
    repository.find_file.return_value = FileRecord(name="Bare.jpg")
    oracle = FreenessOracle(repository)

    repository.extended_metadata.return_value = {"NonFree": "1"}
    assert oracle.is_free("Bare.jpg") is False

    repository.extended_metadata.return_value = {"NonFree": "0"}
    assert oracle.is_free("Bare.jpg") is True
