# pageimages/titles.py
# Responsibility: Normalizes page and file names into the storage keys used by the wiki database.

import re
import unicodedata
from typing import Optional, Tuple

NS_MAIN = 0
NS_FILE = 6

NAMESPACES = {
    "": NS_MAIN,
    "user": 2,
    "project": 4,
    "file": NS_FILE,
    "image": NS_FILE,  # legacy alias
    "mediawiki": 8,
    "template": 10,
    "help": 12,
    "category": 14,
}

INVALID_TITLE_CHARS = re.compile(r"[\[\]{}|#<>]")
_SEPARATOR_RUN = re.compile(r"[\s_]+")


class TitleNormalizer:
    """
    Converts user-facing titles ("File:Foo bar.jpg") into database keys ("Foo_bar.jpg").
    """

    @staticmethod
    def to_db_key(text: str) -> Optional[str]:
        """
        Normalizes a title text to its database key form.

        Steps:
        1. NFC normalization and whitespace/underscore collapsing into single underscores.
        2. Trimming leading/trailing underscores.
        3. Upper-casing the first character.

        Returns:
            Optional[str]: The key, or None if the title is empty or contains illegal characters.
        """
        if not text:
            return None

        normalized = unicodedata.normalize('NFC', text)
        if INVALID_TITLE_CHARS.search(normalized):
            return None

        normalized = _SEPARATOR_RUN.sub('_', normalized).strip('_')
        if not normalized:
            return None

        return normalized[0].upper() + normalized[1:]

    @staticmethod
    def split_title(text: str) -> Optional[Tuple[int, str]]:
        """
        Splits "Namespace:Title" into (namespace id, db key).
        Unknown prefixes are treated as part of a main-namespace title.
        """
        namespace = NS_MAIN
        title = text.strip() if text else ""

        if ':' in title:
            prefix, rest = title.split(':', 1)
            prefix_key = _SEPARATOR_RUN.sub('_', prefix.strip()).lower()
            if prefix_key in NAMESPACES:
                namespace = NAMESPACES[prefix_key]
                title = rest

        db_key = TitleNormalizer.to_db_key(title)
        if db_key is None:
            return None
        return namespace, db_key

    @staticmethod
    def file_db_key(text: str) -> Optional[str]:
        """
        Normalizes a file name, dropping an optional "File:"/"Image:" prefix.
        """
        split = TitleNormalizer.split_title(text)
        if split is None:
            return None

        namespace, db_key = split
        if namespace not in (NS_MAIN, NS_FILE):
            # "Help:Foo.jpg" is not a file reference
            return None
        return db_key
