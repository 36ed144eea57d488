"""Cooperative cancellation token."""

import threading

from .exceptions import TaskCancelledError


class TaskStatus:
    """Cancellation flag that may be set from another thread."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def throw_if_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise TaskCancelledError()
