"""API request SDK for Python.

Builds a single JSON API request, sends it through the standard httpx
transport or a pluggable HTTP client, and delivers a typed result.

Public API:
    APIRequest - Constructs and runs one request
    Success / Failure - Result variants passed to the completion
    APIRequestError and subclasses - Failure kinds

Internal (not for direct use):
    _internal - Builder, transports, lifecycle guard, outcome sinks
"""

from apirequest_sdk._internal.decoding import DEFAULT_DECODER, JSONDecoder, Timestamp
from apirequest_sdk._internal.lifecycle import LifecycleState
from apirequest_sdk._internal.transport import (
    HTTPClient,
    StandardTransport,
    TransportTask,
    get_default_transport,
)
from apirequest_sdk._version import __version__
from apirequest_sdk.exceptions import (
    APIConnectionError,
    APIRequestConfigError,
    APIRequestError,
    APIServerError,
    EmptyServerResponseError,
    ErrorKind,
    InternalError,
    RequestBuildError,
    ResponseDecodeError,
)
from apirequest_sdk.models import (
    APIErrorResponse,
    APISuccessResponse,
    Failure,
    Method,
    RequestDescriptor,
    Result,
    Success,
)
from apirequest_sdk.request import APIRequest

__all__ = [
    "__version__",
    "APIRequest",
    "Method",
    "RequestDescriptor",
    "Success",
    "Failure",
    "Result",
    "APISuccessResponse",
    "APIErrorResponse",
    "ErrorKind",
    "APIRequestError",
    "APIRequestConfigError",
    "RequestBuildError",
    "APIConnectionError",
    "EmptyServerResponseError",
    "APIServerError",
    "ResponseDecodeError",
    "InternalError",
    "JSONDecoder",
    "DEFAULT_DECODER",
    "Timestamp",
    "LifecycleState",
    "HTTPClient",
    "StandardTransport",
    "TransportTask",
    "get_default_transport",
]
