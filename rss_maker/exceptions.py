class RSSMakerError(Exception):
    """Base class for every error raised by rss_maker."""


class NetworkError(RSSMakerError):
    """Raised when a page or API response cannot be fetched."""


class FetchCancelled(NetworkError):
    """Raised when a fetch is abandoned because the batch was cancelled."""


class ParseError(RSSMakerError):
    """Raised when fetched markup cannot be parsed into a document."""


class RenderError(RSSMakerError):
    """Raised when an element cannot be rendered back to markup text."""


class TimezoneError(RSSMakerError):
    """Raised when the configured timezone is missing from the tz database."""


class StructuralAssumptionError(RSSMakerError):
    """Raised when an expected element, attribute or position is absent."""


class VKAPIError(RSSMakerError):
    """Raised when the VK API answers with an error payload."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"VK API error {code}: {message}")
        self.code = code
        self.message = message
