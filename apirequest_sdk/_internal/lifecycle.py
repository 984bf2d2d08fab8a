"""Request lifecycle state and cancellation guard."""

import threading
from enum import Enum


class LifecycleState(Enum):
    """Progression of a single API request."""

    IDLE = "idle"
    RUNNING = "running"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self in (LifecycleState.CANCELLED, LifecycleState.COMPLETED)


class CancellationGuard:
    """Lifecycle state machine for one request.

    Transitions:
        IDLE -> RUNNING (start)
        IDLE | RUNNING -> CANCELLED (cancel)
        IDLE | RUNNING -> COMPLETED (complete)

    CANCELLED and COMPLETED are terminal. Every transition is a single
    check-and-set under a lock, so a response arriving on one thread and a
    cancel on another can never both take effect.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = LifecycleState.IDLE

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_cancelled(self) -> bool:
        return self._state is LifecycleState.CANCELLED

    def start(self) -> bool:
        """Move IDLE -> RUNNING. Returns False if the request was not idle."""
        return self._transition(LifecycleState.RUNNING, (LifecycleState.IDLE,))

    def cancel(self) -> bool:
        """Move to CANCELLED. Returns False if already terminal."""
        return self._transition(
            LifecycleState.CANCELLED, (LifecycleState.IDLE, LifecycleState.RUNNING)
        )

    def complete(self) -> bool:
        """Move to COMPLETED. Returns False if already terminal.

        The caller may deliver an outcome only when this returns True.
        """
        return self._transition(
            LifecycleState.COMPLETED, (LifecycleState.IDLE, LifecycleState.RUNNING)
        )

    def _transition(self, target: LifecycleState, allowed: tuple[LifecycleState, ...]) -> bool:
        with self._lock:
            if self._state not in allowed:
                return False
            self._state = target
            return True
