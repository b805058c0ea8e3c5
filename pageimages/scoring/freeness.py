# pageimages/scoring/freeness.py
# Responsibility: Decides whether a file may be used without copyright restrictions.

from typing import Any

from pageimages.services.file_repository import FileRepository

NON_FREE_FIELD = "NonFree"


def is_flag_set(value: Any) -> bool:
    """
    Metadata flags arrive as strings as often as booleans; "0", "" and empty values mean unset.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value not in ("", "0")
    if isinstance(value, (int, float)):
        return value != 0
    return bool(value)


class FreenessOracle:
    """
    Answers "is this file free to use?" by consulting the file's extended metadata.
    """

    def __init__(self, repository: FileRepository):
        self.repository = repository

    def is_free(self, file_name: str) -> bool:
        file = self.repository.find_file(file_name)
        if file is None:
            # Unknown files are not known to be non-free.
            # TODO: confirm with product owners whether missing files should count as non-free.
            return True

        metadata = self.repository.extended_metadata(file)
        entry = metadata.get(NON_FREE_FIELD)
        if isinstance(entry, dict):
            entry = entry.get('value')
        return not is_flag_set(entry)
