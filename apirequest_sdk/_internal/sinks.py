"""Outcome delivery for API requests.

A request delivers each terminal outcome to exactly one sink, chosen once when
the request starts:

* `CompletionSink` decodes 2xx bodies into the response model and calls the
  completion callback with a `Result`.
* `CustomHandlerSink` hands raw 2xx bodies and every failure to a caller
  supplied handler. The completion callback is never called.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from apirequest_sdk._internal.decoding import JSONDecoder
from apirequest_sdk.exceptions import APIRequestError, InternalError, ResponseDecodeError
from apirequest_sdk.models.responses import APISuccessResponse
from apirequest_sdk.models.result import Failure, Result, Success

if TYPE_CHECKING:
    from apirequest_sdk.request import APIRequest

Completion = Callable[["APIRequest", Result], Any]
CustomSuccessHandler = Callable[
    ["APIRequest", bytes | None, JSONDecoder, APIRequestError | None], Any
]


class OutcomeSink(ABC):
    """Receives the terminal outcome of a request."""

    @abstractmethod
    def success(self, request: "APIRequest", data: bytes) -> None:
        """Handle the body of a 2xx response."""

    @abstractmethod
    def deliver(self, request: "APIRequest", result: Result) -> None:
        """Hand a finished result to the caller."""

    def failure(self, request: "APIRequest", error: APIRequestError) -> None:
        self.deliver(request, Failure(error))


class CompletionSink(OutcomeSink):
    """Default sink: decode the success payload and call the completion."""

    def __init__(
        self,
        completion: Completion,
        decoder: JSONDecoder,
        response_model: type[APISuccessResponse] = APISuccessResponse,
    ) -> None:
        self._completion = completion
        self._decoder = decoder
        self._response_model = response_model

    def success(self, request: "APIRequest", data: bytes) -> None:
        try:
            response = self._decoder.decode(self._response_model, data)
        except ValidationError as e:
            self.failure(request, ResponseDecodeError(e, data))
            return
        self.deliver(request, Success(response.model_copy(update={"raw_data": data})))

    def deliver(self, request: "APIRequest", result: Result) -> None:
        self._completion(request, result)


class CustomHandlerSink(OutcomeSink):
    """Override sink: the handler owns classification of 2xx bodies.

    The handler is also the only recipient of failures, including those that
    have nothing to do with the success payload.
    """

    def __init__(self, handler: CustomSuccessHandler, decoder: JSONDecoder) -> None:
        self._handler = handler
        self._decoder = decoder

    def success(self, request: "APIRequest", data: bytes) -> None:
        self._handler(request, data, self._decoder, None)

    def deliver(self, request: "APIRequest", result: Result) -> None:
        if isinstance(result, Failure):
            self._handler(request, None, self._decoder, result.error)
        else:
            self._handler(
                request,
                None,
                self._decoder,
                InternalError("Typed success result reached a custom success handler"),
            )
