"""Public exceptions for the API request SDK.

Every terminal failure of an `APIRequest` is one of the `APIRequestError`
subclasses below. They are delivered inside a `Failure` result rather than
raised, so each class carries an `ErrorKind` tag for callers that prefer to
match on kind instead of type.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from apirequest_sdk.models import APIErrorResponse


class ErrorKind(StrEnum):
    """Closed set of failure kinds an API request can end with."""

    BUILD_FAILURE = "build_failure"
    CONNECTION_ERROR = "connection_error"
    EMPTY_SERVER_RESPONSE = "empty_server_response"
    SERVER_ERROR = "server_error"
    DECODE_ERROR = "decode_error"
    INTERNAL_ERROR = "internal_error"


class APIRequestError(Exception):
    """Base exception for all API request errors."""

    kind: ClassVar[ErrorKind | None] = None


class APIRequestConfigError(APIRequestError):
    """Configuration error (conflicting or invalid request options)."""


class RequestBuildError(APIRequestError):
    """The request could not be built (unresolvable URL, non-JSON body)."""

    kind = ErrorKind.BUILD_FAILURE


class APIConnectionError(APIRequestError):
    """Transport-level failure (DNS, timeout, TLS, refused connection)."""

    kind = ErrorKind.CONNECTION_ERROR

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Connection error: {cause}")
        self.cause = cause


class EmptyServerResponseError(APIRequestError):
    """The transport returned neither a body nor a status."""

    kind = ErrorKind.EMPTY_SERVER_RESPONSE

    def __init__(self, message: str = "Empty server response") -> None:
        super().__init__(message)


class APIServerError(APIRequestError):
    """Non-2xx response carrying a structured error body."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, payload: "APIErrorResponse", status_code: int | None = None) -> None:
        super().__init__(payload.describe())
        self.payload = payload
        self.status_code = status_code


class ResponseDecodeError(APIRequestError):
    """Response body did not match the expected JSON shape.

    The raw bytes are kept for diagnostics.
    """

    kind = ErrorKind.DECODE_ERROR

    def __init__(self, cause: BaseException, raw_data: bytes) -> None:
        super().__init__(f"Could not decode response: {cause}")
        self.cause = cause
        self.raw_data = raw_data


class InternalError(APIRequestError):
    """Invariant violation inside the request pipeline."""

    kind = ErrorKind.INTERNAL_ERROR
