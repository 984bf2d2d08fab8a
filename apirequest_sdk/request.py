"""Single API request: build, dispatch, classify, deliver."""

import os
import sys
from collections.abc import Mapping
from concurrent.futures import Executor
from typing import Any

from pydantic import ValidationError

from apirequest_sdk._internal.builder import build_descriptor
from apirequest_sdk._internal.decoding import DEFAULT_DECODER, JSONDecoder
from apirequest_sdk._internal.executor import get_callback_executor
from apirequest_sdk._internal.lifecycle import CancellationGuard, LifecycleState
from apirequest_sdk._internal.redaction import redact_body
from apirequest_sdk._internal.sinks import (
    Completion,
    CompletionSink,
    CustomHandlerSink,
    CustomSuccessHandler,
    OutcomeSink,
)
from apirequest_sdk._internal.transport import (
    HTTPClient,
    StandardTransport,
    StatusInfo,
    TransportTask,
    get_default_transport,
)
from apirequest_sdk.exceptions import (
    APIConnectionError,
    APIRequestConfigError,
    APIServerError,
    EmptyServerResponseError,
    RequestBuildError,
    ResponseDecodeError,
)
from apirequest_sdk.models.descriptor import Method, RequestDescriptor
from apirequest_sdk.models.responses import APIErrorResponse, APISuccessResponse

DEFAULT_TIMEOUT_MS = 60_000


class APIRequest:
    """Constructs and runs one API request.

    Set the request fields, then call `run()`. The outcome is delivered once,
    on the callback executor, to either `completion` or, when one is set,
    `custom_success_handler`:

        def on_done(request, result):
            if isinstance(result, Success):
                print(result.response.access_token)

        request = APIRequest("https://example.com", completion=on_done)
        request.path = "/token"
        request.body_params = {"grant_type": "password"}
        request.run()

    Fields may be changed freely until `run()` is called. A request runs at
    most once; `cancel()` suppresses any outcome that has not been delivered
    yet.
    """

    def __init__(
        self,
        base_url: str,
        *,
        completion: Completion,
        method: Method | str = Method.POST,
        path: str | None = None,
        url_params: Mapping[str, str] | None = None,
        body_params: Mapping[str, Any] | None = None,
        additional_headers: Mapping[str, str] | None = None,
        custom_success_handler: CustomSuccessHandler | None = None,
        http_client: HTTPClient | None = None,
        transport: StandardTransport | None = None,
        decoder: JSONDecoder | None = None,
        callback_executor: Executor | None = None,
        response_model: type[APISuccessResponse] = APISuccessResponse,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the request.

        Args:
            base_url: Absolute base URL of the API.
            completion: Called as ``completion(request, result)`` with the outcome.
            method: HTTP method (default: POST).
            path: Path that replaces the base URL's path.
            url_params: Query parameters.
            body_params: JSON body parameters.
            additional_headers: Headers overriding the fixed ones.
            custom_success_handler: Called as ``handler(request, data, decoder, error)``
                instead of `completion` for every outcome.
            http_client: Pluggable transport. When given, the standard transport
                is never used and cancellation only suppresses the outcome.
            transport: Standard transport to send with. Defaults to the shared
                one from `get_default_transport()`.
            decoder: JSON decoder shared with the custom handler.
            callback_executor: Executor that runs response handling. Defaults
                to the shared single-worker executor.
            response_model: Model 2xx bodies are decoded into.
            timeout_ms: Transport timeout in milliseconds.
            user_agent: Override of the computed User-Agent header.
            debug: Enable debug logging to stderr.

        Raises:
            APIRequestConfigError: If both `http_client` and `transport` are given.
        """
        if http_client is not None and transport is not None:
            raise APIRequestConfigError("Pass either http_client or transport, not both")

        self.base_url = base_url
        self.method = method
        self.path = path
        self.url_params = url_params
        self.body_params = body_params
        self.additional_headers = additional_headers
        self.custom_success_handler = custom_success_handler
        self.response_model = response_model
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent

        self._completion = completion
        self._http_client = http_client
        self._transport = transport
        self._decoder = decoder or DEFAULT_DECODER
        self._callback_executor = callback_executor
        self._debug = debug

        self._guard = CancellationGuard()
        self._task: TransportTask | None = None
        self._sink: OutcomeSink | None = None

    @classmethod
    def from_env(
        cls,
        base_url: str,
        *,
        completion: Completion,
        **options: Any,
    ) -> "APIRequest":
        """Create a request configured from environment variables.

        Optional environment variables:
            APIREQUEST_TIMEOUT_MS: Transport timeout in milliseconds.
            APIREQUEST_USER_AGENT: Override of the computed User-Agent.
            APIREQUEST_DEBUG: Set to "1" to enable debug logging.

        Keyword options take precedence over the environment.

        Raises:
            ValueError: If APIREQUEST_TIMEOUT_MS is not an integer.
        """
        timeout_ms = int(os.environ.get("APIREQUEST_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        user_agent = os.environ.get("APIREQUEST_USER_AGENT") or None
        debug = os.environ.get("APIREQUEST_DEBUG", "") == "1"

        settings: dict[str, Any] = {
            "timeout_ms": timeout_ms,
            "user_agent": user_agent,
            "debug": debug,
        }
        settings.update(options)
        return cls(base_url, completion=completion, **settings)

    @property
    def state(self) -> LifecycleState:
        return self._guard.state

    @property
    def is_cancelled(self) -> bool:
        return self._guard.is_cancelled

    @property
    def task(self) -> TransportTask | None:
        """Standard transport task, once `run()` has sent the request."""
        return self._task

    @property
    def uses_http_client(self) -> bool:
        return self._http_client is not None

    @property
    def decoder(self) -> JSONDecoder:
        return self._decoder

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[apirequest-sdk] {message}", file=sys.stderr)

    # =========================================================================
    # Building
    # =========================================================================

    def build_request(self) -> RequestDescriptor:
        """Build the transport-ready descriptor from the current fields.

        Raises:
            RequestBuildError: If the URL cannot be resolved or the body
                cannot be serialised.
        """
        return build_descriptor(
            self.base_url,
            method=self.method,
            path=self.path,
            url_params=self.url_params,
            body_params=self.body_params,
            additional_headers=self.additional_headers,
            timeout=self.timeout_ms / 1000,
            user_agent=self.user_agent,
        )

    # =========================================================================
    # Dispatch
    # =========================================================================

    def run(self) -> None:
        """Send the request.

        Returns immediately. Does nothing if the request already ran or was
        cancelled. A build failure is delivered synchronously, before any
        network activity.
        """
        if not self._guard.start():
            self._log_debug(f"Ignoring run() in state {self._guard.state.value}")
            return

        self._sink = self._select_sink()

        try:
            descriptor = self.build_request()
        except RequestBuildError as e:
            self._log_debug(f"Build failed: {e}")
            if self._guard.complete():
                self._sink.failure(self, e)
            return

        self._log_debug(f"Sending {descriptor.method.value} {descriptor.url}")
        if self._debug and descriptor.body is not None:
            self._log_debug(f"Request body: {redact_body(descriptor.body)}")

        if self._http_client is not None:
            self._send_with_http_client(self._http_client, descriptor)
        else:
            self._send_with_transport(self._transport or get_default_transport(), descriptor)

    def cancel(self) -> None:
        """Cancel the request.

        No outcome is delivered after this returns, unless it was already
        delivered. Only the standard transport aborts the send itself; with an
        `http_client` the call keeps running and its result is discarded.
        """
        if not self._guard.cancel():
            return
        self._log_debug("Request cancelled")
        if self._http_client is None and self._task is not None:
            self._task.cancel()

    def _select_sink(self) -> OutcomeSink:
        if self.custom_success_handler is not None:
            return CustomHandlerSink(self.custom_success_handler, self._decoder)
        return CompletionSink(self._completion, self._decoder, self.response_model)

    def _send_with_transport(self, transport: StandardTransport, descriptor: RequestDescriptor) -> None:
        # The callback is a bound method, so the transport keeps this request
        # alive until the response has been handled.
        try:
            self._task = transport.start(descriptor, self._post_response)
        except Exception as e:
            self._post_response(None, None, e)
            return
        if self._guard.is_cancelled:
            self._task.cancel()

    def _send_with_http_client(self, http_client: HTTPClient, descriptor: RequestDescriptor) -> None:
        self._log_debug(f"Using pluggable HTTP client {type(http_client).__name__}")
        try:
            http_client.send_request(descriptor, self._post_response)
        except Exception as e:
            self._post_response(None, None, e)

    def _post_response(
        self,
        data: bytes | None,
        response: StatusInfo | None,
        error: BaseException | None,
    ) -> None:
        executor = self._callback_executor or get_callback_executor()
        executor.submit(self._handle_response, data, response, error)

    # =========================================================================
    # Response Classification
    # =========================================================================

    def _handle_response(
        self,
        data: bytes | None,
        response: StatusInfo | None,
        error: BaseException | None,
    ) -> None:
        try:
            self._classify_response(data, response, error)
        except Exception as e:
            self._log_debug(f"Response handling failed: {e!r}")
            raise

    def _classify_response(
        self,
        data: bytes | None,
        response: StatusInfo | None,
        error: BaseException | None,
    ) -> None:
        """Classify a transport outcome and deliver it to the sink."""
        if not self._guard.complete():
            self._log_debug(f"Dropping response in state {self._guard.state.value}")
            return

        sink: OutcomeSink = self._sink  # type: ignore[assignment]

        if error is not None:
            self._log_debug(f"Connection error: {error}")
            sink.failure(self, APIConnectionError(error))
            return

        if data is None or response is None:
            self._log_debug("Empty server response")
            sink.failure(self, EmptyServerResponseError())
            return

        status_code = response.status_code
        if self._debug:
            self._log_debug(f"Response {status_code}: {redact_body(data)}")

        if not 200 <= status_code < 300:
            try:
                payload = self._decoder.decode(APIErrorResponse, data)
            except ValidationError as e:
                sink.failure(self, ResponseDecodeError(e, data))
                return
            sink.failure(self, APIServerError(payload, status_code))
            return

        sink.success(self, data)

    def __repr__(self) -> str:
        return (
            f"<APIRequest {str(self.method).upper()} {self.base_url}"
            f"{self.path or ''} state={self._guard.state.value}>"
        )
