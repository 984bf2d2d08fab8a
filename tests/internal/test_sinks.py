"""Tests for outcome sinks."""

from pydantic import ConfigDict

from apirequest_sdk._internal.decoding import DEFAULT_DECODER
from apirequest_sdk._internal.sinks import CompletionSink, CustomHandlerSink
from apirequest_sdk.exceptions import EmptyServerResponseError, InternalError, ResponseDecodeError
from apirequest_sdk.models import APISuccessResponse, Failure, Success

REQUEST = object()


class TestCompletionSink:
    """Tests for CompletionSink."""

    def test_success_attaches_raw_data(self, completion):
        """Should decode the body and attach the raw bytes."""
        sink = CompletionSink(completion, DEFAULT_DECODER)
        sink.success(REQUEST, b'{"status":"SUCCESS","sessionToken":"tok"}')

        request, result = completion.calls[0]
        assert request is REQUEST
        assert isinstance(result, Success)
        assert result.response.status == "SUCCESS"
        assert result.response.session_token == "tok"
        assert result.response.raw_data == b'{"status":"SUCCESS","sessionToken":"tok"}'

    def test_success_decode_failure(self, completion):
        """Should deliver a decode error when the body is not an object."""
        sink = CompletionSink(completion, DEFAULT_DECODER)
        sink.success(REQUEST, b"[1, 2, 3]")

        _, result = completion.calls[0]
        assert isinstance(result, Failure)
        assert isinstance(result.error, ResponseDecodeError)
        assert result.error.raw_data == b"[1, 2, 3]"

    def test_failure(self, completion):
        """Should wrap the error in a Failure."""
        error = EmptyServerResponseError()
        CompletionSink(completion, DEFAULT_DECODER).failure(REQUEST, error)

        _, result = completion.calls[0]
        assert result == Failure(error)
        assert result.is_success is False

    def test_custom_response_model(self, completion):
        """Should decode into the configured model."""

        class FactorList(APISuccessResponse):
            factors: list[str]

        CompletionSink(completion, DEFAULT_DECODER, FactorList).success(
            REQUEST, b'{"factors":["sms","push"]}'
        )
        _, result = completion.calls[0]
        assert result.response.factors == ["sms", "push"]

    def test_frozen_response_model(self, completion):
        """Should attach raw bytes to a frozen response model."""

        class FrozenToken(APISuccessResponse):
            model_config = ConfigDict(frozen=True)

        CompletionSink(completion, DEFAULT_DECODER, FrozenToken).success(
            REQUEST, b'{"access_token":"abc"}'
        )
        _, result = completion.calls[0]
        assert isinstance(result, Success)
        assert isinstance(result.response, FrozenToken)
        assert result.response.access_token == "abc"
        assert result.response.raw_data == b'{"access_token":"abc"}'


class TestCustomHandlerSink:
    """Tests for CustomHandlerSink."""

    def test_success_passes_raw_bytes(self, handler):
        """Should pass raw bytes and the decoder with no error."""
        CustomHandlerSink(handler, DEFAULT_DECODER).success(REQUEST, b"{}")
        assert handler.calls == [(REQUEST, b"{}", DEFAULT_DECODER, None)]

    def test_failure_passes_error(self, handler):
        """Should pass the error and no data."""
        error = EmptyServerResponseError()
        CustomHandlerSink(handler, DEFAULT_DECODER).failure(REQUEST, error)
        assert handler.calls == [(REQUEST, None, DEFAULT_DECODER, error)]

    def test_typed_success_becomes_internal_error(self, handler):
        """Should report an internal error if a typed success reaches it."""
        sink = CustomHandlerSink(handler, DEFAULT_DECODER)
        sink.deliver(REQUEST, Success(APISuccessResponse()))

        _, data, _, error = handler.calls[0]
        assert data is None
        assert isinstance(error, InternalError)
