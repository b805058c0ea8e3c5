# pageimages/errors.py
# Responsibility: Exception types raised by the page image selection core.


class PageImagesError(Exception):
    """Base class for page image selection errors."""


class ConfigurationError(PageImagesError):
    """
    Broken deployment configuration (unknown denylist source kind, empty score table).
    Never degraded locally: the invocation that hits it must fail.
    """


class SourceUnavailable(PageImagesError):
    """
    A denylist source could not be read (timeout, transport error, HTTP error status).
    The resolver degrades the affected source to an empty contribution.
    """

    def __init__(self, locator: str, reason: str):
        super().__init__(f"Denylist source unavailable: {locator} ({reason})")
        self.locator = locator
        self.reason = reason
