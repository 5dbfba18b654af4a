"""Error types for the Ollama client.

Every failure is terminal for the call in progress; nothing here is retried.
"""


class OllamaError(Exception):
    """Base exception for Ollama-related errors."""

    pass


class OllamaEncodeError(OllamaError):
    """Raised when the request payload cannot be serialized."""

    pass


class OllamaConnectivityError(OllamaError):
    """Raised when the server cannot be reached or the connection drops."""

    pass


class OllamaTimeoutError(OllamaConnectivityError):
    """Raised when the server does not respond within the deadline."""

    pass


class OllamaAPIError(OllamaError):
    """Raised when the server answers with a non-200 status."""

    def __init__(self, status_code: int, body: str) -> None:
        """Initialize API error.

        Args:
            status_code: HTTP status code.
            body: Raw response body text.
        """
        super().__init__(f"ollama returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class OllamaDecodeError(OllamaError):
    """Raised when a line of the response body is not a valid record."""

    pass


class OllamaStreamEndedError(OllamaDecodeError):
    """Raised when the body ends before a record reports ``done``."""

    pass


class OllamaStreamError(OllamaError):
    """Raised when the server reports an error inside a 200 stream."""

    pass


__all__ = [
    "OllamaAPIError",
    "OllamaConnectivityError",
    "OllamaDecodeError",
    "OllamaEncodeError",
    "OllamaError",
    "OllamaStreamEndedError",
    "OllamaStreamError",
    "OllamaTimeoutError",
]
