"""Callback executor shared by all requests."""

import threading
from concurrent.futures import Executor, ThreadPoolExecutor

_callback_executor: Executor | None = None
_callback_executor_lock = threading.Lock()


def get_callback_executor() -> Executor:
    """Get the process-wide executor that runs response handling.

    The executor has a single worker, so completions and custom handlers of
    every request using it run one at a time, in submission order.

    Returns:
        The shared single-worker executor.
    """
    global _callback_executor
    with _callback_executor_lock:
        if _callback_executor is None:
            _callback_executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="apirequest-callback"
            )
        return _callback_executor
