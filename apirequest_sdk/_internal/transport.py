"""Transports that physically send request descriptors.

Two strategies exist:

* `StandardTransport` sends through a shared `httpx.Client` on a worker pool
  and returns a `TransportTask` that can be cancelled.
* Any object implementing `HTTPClient` can be plugged in instead. It gets the
  descriptor and a callback, and exposes no cancel primitive.

Both report back through the same callback shape:
``callback(data, response, error)``.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol, runtime_checkable

import httpx

from apirequest_sdk._internal.http import create_http_client
from apirequest_sdk.models.descriptor import RequestDescriptor

DEFAULT_MAX_WORKERS = 4


class StatusInfo(Protocol):
    """Anything carrying an HTTP status code (e.g. `httpx.Response`)."""

    status_code: int


TransportCallback = Callable[[bytes | None, StatusInfo | None, BaseException | None], None]


@runtime_checkable
class HTTPClient(Protocol):
    """Pluggable transport.

    Implementations must eventually call `callback` exactly once, from any
    thread, with the body bytes, an object exposing `status_code`, and/or the
    error that prevented a response.
    """

    def send_request(self, descriptor: RequestDescriptor, callback: TransportCallback) -> None: ...


class TransportTask:
    """Handle to a request in flight on the standard transport."""

    def __init__(self, descriptor: RequestDescriptor) -> None:
        self.descriptor = descriptor
        self._cancel_requested = threading.Event()
        self._future: Future[None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested.is_set()

    @property
    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def cancel(self) -> None:
        """Request cancellation.

        A send that has not started yet is skipped entirely. A send already
        on the wire runs to completion and still reports its outcome.
        """
        self._cancel_requested.set()
        if self._future is not None:
            self._future.cancel()

    def _attach(self, future: "Future[None]") -> None:
        self._future = future
        if self.cancelled:
            future.cancel()


class StandardTransport:
    """Default transport backed by httpx.

    Sends run on a small thread pool so `start()` never blocks the caller.
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the transport.

        Args:
            client: httpx client to send with. Defaults to one built by
                `create_http_client()`.
            max_workers: Number of concurrent sends.
        """
        self._client = client or create_http_client()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="apirequest-transport"
        )

    def start(self, descriptor: RequestDescriptor, callback: TransportCallback) -> TransportTask:
        """Submit `descriptor` and return its task handle immediately."""
        task = TransportTask(descriptor)
        future = self._executor.submit(self._perform, descriptor, task, callback)
        task._attach(future)
        return task

    def _perform(
        self,
        descriptor: RequestDescriptor,
        task: TransportTask,
        callback: TransportCallback,
    ) -> None:
        if task.cancelled:
            return
        try:
            response = self._client.request(
                descriptor.method.value,
                descriptor.url,
                headers=descriptor.headers,
                content=descriptor.body,
                timeout=descriptor.timeout,
            )
        except Exception as e:
            callback(None, None, e)
            return
        callback(response.content, response, None)

    def close(self) -> None:
        """Stop accepting sends and close the underlying client."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()

    def __enter__(self) -> "StandardTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_default_transport: StandardTransport | None = None
_default_transport_lock = threading.Lock()


def get_default_transport() -> StandardTransport:
    """Get the process-wide standard transport.

    Created on first use and shared by every request that is not given an
    explicit transport or HTTP client.

    Returns:
        The shared StandardTransport instance.
    """
    global _default_transport
    with _default_transport_lock:
        if _default_transport is None:
            _default_transport = StandardTransport()
        return _default_transport
