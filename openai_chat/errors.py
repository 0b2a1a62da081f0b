"""Chat client exceptions."""
from typing import Optional

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class OpenAIError(Exception):
    """Base exception for chat client errors."""
    pass


class InvalidEndpointError(OpenAIError):
    """Base URL and endpoint do not form a usable URL. Raised before any I/O."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL or endpoint: {url}")


class APIError(OpenAIError):
    """Server returned a status outside 200-299."""

    def __init__(self, code: int, message: str = UNKNOWN_ERROR_MESSAGE):
        self.code = code
        self.message = message
        super().__init__(f"API Error ({code}): {message}")


class DecodingError(OpenAIError):
    """Successful status, but the body did not match the expected shape."""

    def __init__(self, body: Optional[str] = None):
        self.body = body
        super().__init__("Failed to decode API response")


class RequestTimeoutError(OpenAIError):
    """Transport exceeded the configured timeout."""

    def __init__(self):
        super().__init__("Request timed out")


class UnknownError(OpenAIError):
    """Any other failure; wraps the original cause."""

    def __init__(self, underlying: BaseException):
        self.underlying = underlying
        super().__init__(f"Unknown error: {underlying}")
