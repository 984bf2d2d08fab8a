"""Shared fixtures for API request tests."""

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any

import pytest

from apirequest_sdk._internal.transport import TransportTask
from apirequest_sdk.models import RequestDescriptor


class ManualExecutor(Executor):
    """Executor that only runs submitted work when told to."""

    def __init__(self) -> None:
        self.queue: list[tuple[Future, Any, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.queue.append((future, fn, args, kwargs))
        return future

    def run_all(self) -> int:
        """Run queued work in order. Returns the number of items run."""
        count = 0
        while self.queue:
            future, fn, args, kwargs = self.queue.pop(0)
            future.set_result(fn(*args, **kwargs))
            count += 1
        return count


@dataclass
class FakeResponse:
    status_code: int


class FakeHTTPClient:
    """Pluggable transport that records sends and responds on demand."""

    def __init__(self) -> None:
        self.calls: list[tuple[RequestDescriptor, Any]] = []

    def send_request(self, descriptor, callback) -> None:
        self.calls.append((descriptor, callback))

    def respond(
        self,
        data: bytes | None = None,
        status_code: int | None = None,
        error: BaseException | None = None,
        index: int = -1,
    ) -> None:
        _, callback = self.calls[index]
        response = FakeResponse(status_code) if status_code is not None else None
        callback(data, response, error)


class FakeTransport:
    """Standard-transport stand-in that hands out real task handles."""

    def __init__(self) -> None:
        self.tasks: list[TransportTask] = []
        self.callbacks: list[Any] = []

    def start(self, descriptor, callback) -> TransportTask:
        task = TransportTask(descriptor)
        self.tasks.append(task)
        self.callbacks.append(callback)
        return task

    def respond(
        self,
        data: bytes | None = None,
        status_code: int | None = None,
        error: BaseException | None = None,
    ) -> None:
        response = FakeResponse(status_code) if status_code is not None else None
        self.callbacks[-1](data, response, error)


class Recorder:
    """Callable that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, *args) -> None:
        self.calls.append(args)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def http_client() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def completion() -> Recorder:
    return Recorder()


@pytest.fixture
def handler() -> Recorder:
    return Recorder()
