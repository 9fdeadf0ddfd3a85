"""Error taxonomy for API requests.

Every public operation of ``APIService`` either returns a value or raises exactly
one of the ``APIError`` subclasses below. Each error carries a fixed,
human-readable ``message`` suitable for showing to an end user.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional


class APIErrorKind(str, Enum):
    """Closed set of API failure kinds."""

    INVALID_URL = "invalid_url"
    REQUEST_FAILED = "request_failed"
    DECODING_FAILED = "decoding_failed"
    ENCODING_FAILED = "encoding_failed"
    NO_INTERNET_CONNECTION = "no_internet_connection"
    REQUEST_TIMED_OUT = "request_timed_out"
    SERVER_UNAVAILABLE = "server_unavailable"
    UNEXPECTED = "unexpected"


GENERIC_REQUEST_FAILED_MESSAGE = "The request failed. Please try again."


def extract_message(body: Optional[bytes]) -> str:
    """
    Pull a server-supplied ``"message"`` string out of a JSON error body.

    Args:
        body: Raw response body, may be None

    Returns:
        The message, or an empty string if the body is absent, not JSON,
        not an object, or has no string ``"message"`` field
    """
    if not body:
        return ""
    try:
        payload: Any = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return ""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message
    return ""


class APIError(Exception):
    """Base class for all API errors."""

    kind: APIErrorKind = APIErrorKind.UNEXPECTED
    default_message: str = "An unexpected error occurred."

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        self.message = self._build_message()
        super().__init__(self.message)

    def _build_message(self) -> str:
        return self.default_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidURLError(APIError):
    """The endpoint path could not be resolved to an absolute URL."""

    kind = APIErrorKind.INVALID_URL
    default_message = "The URL is invalid. Please contact support."

    def __init__(self, url: str = "") -> None:
        self.url = url
        super().__init__()


class RequestFailedError(APIError):
    """The server answered with a status code outside [200, 300)."""

    kind = APIErrorKind.REQUEST_FAILED
    default_message = GENERIC_REQUEST_FAILED_MESSAGE

    def __init__(self, status_code: int, body: Optional[bytes] = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__()

    def _build_message(self) -> str:
        return extract_message(self.body) or self.default_message

    def __repr__(self) -> str:
        return f"RequestFailedError(status_code={self.status_code}, message={self.message!r})"


class DecodingFailedError(APIError):
    """The response body could not be decoded into the requested type."""

    kind = APIErrorKind.DECODING_FAILED
    default_message = "Failed to process the response. Please try again later."

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)


class EncodingFailedError(APIError):
    """The request body could not be serialized to JSON."""

    kind = APIErrorKind.ENCODING_FAILED
    default_message = "Failed to send your data. Please try again."

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)


class NoInternetConnectionError(APIError):
    kind = APIErrorKind.NO_INTERNET_CONNECTION
    default_message = "No internet connection. Please check your network settings."


class RequestTimedOutError(APIError):
    kind = APIErrorKind.REQUEST_TIMED_OUT
    default_message = "The request timed out. Please try again later."


class ServerUnavailableError(APIError):
    kind = APIErrorKind.SERVER_UNAVAILABLE
    default_message = "The server is currently unavailable. Please try again in a few moments."


class UnexpectedError(APIError):
    """Any failure that does not fit another kind."""

    kind = APIErrorKind.UNEXPECTED

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)

    def _build_message(self) -> str:
        return f"An unexpected error occurred: {self.cause}"
