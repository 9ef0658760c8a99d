"""Shared test fixtures for perch."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable


class FakeSource:
    """In-memory source that pushes values to its subscribers.

    With ``replay=True`` a new subscriber synchronously receives the latest
    emitted value while subscribing, like a state holder would.
    """

    def __init__(self, *, replay: bool = False) -> None:
        self._callbacks: list[Callable[[Any], None]] = []
        self._lock = threading.Lock()
        self._replay = replay
        self._latest: list[Any] = []

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)
            latest = list(self._latest)
        if self._replay and latest:
            callback(latest[-1])

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self, value: Any) -> None:
        with self._lock:
            self._latest = [value]
            callbacks = tuple(self._callbacks)
        for callback in callbacks:
            callback(value)

    def emit_later(self, value: Any, delay: float = 0.1) -> threading.Thread:
        """Emit ``value`` from a background thread after ``delay`` seconds."""

        def run() -> None:
            time.sleep(delay)
            self.emit(value)

        thread = threading.Thread(target=run, name="fake-producer", daemon=True)
        thread.start()
        return thread


@pytest.fixture
def source() -> FakeSource:
    """A source without replay."""
    return FakeSource()


@pytest.fixture
def replaying_source() -> FakeSource:
    """A source that replays its latest value to new subscribers."""
    return FakeSource(replay=True)
