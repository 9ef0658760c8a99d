"""Recording observer — captures pushed values for test assertions.

Subscribes to one source, records every value it is handed in arrival
order, and lets the test thread block (or an asyncio task suspend) until
a value arrives.  Derived observers created with ``map`` replay the
current history through a transform and keep receiving transformed
values afterwards.

Usage::

    observer = observe(source)
    source.emit_later(42)
    observer.await_value(timeout=1.0).assert_has_value().assert_value(42)

Thread Safety:
    History, child sinks and async waiters are guarded by one
    ``threading.Condition``.  A value is appended and waiters are
    signalled in the same critical section, so a released waiter always
    sees the value in the history.  One producer thread may deliver
    while any number of threads wait or assert.

"""

from __future__ import annotations

import asyncio
import itertools
import threading
import time
from typing import TYPE_CHECKING, Any, Self

from perch._errors import AssertionMismatch, NoValueRecorded
from perch.config import DEFAULT_CONFIG
from perch.observing.gate import FIRST_VALUE, AsyncWaiter, WaitGate

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from perch._types import Predicate, Timeout, Transform, Unsubscribe
    from perch.config import PerchConfig
    from perch.observability.collector import EventCollector
    from perch.observing.source import Subscribable

_observer_ids = itertools.count(1)


def _describe(value: Any) -> str:
    """Render a value with its class for mismatch messages."""
    if value is None:
        return "None"
    return f"{value!r} (class: {type(value).__name__})"


def _describe_predicate(predicate: Callable[..., Any]) -> str:
    return getattr(predicate, "__name__", None) or repr(predicate)


class RecordingObserver[T]:
    """Records every value delivered by a source and asserts on the history.

    Create one detached with ``create()`` (and feed it through
    ``on_value``) or subscribed with ``attach(source)``.  All assertion
    methods return the observer so checks can be chained.

    Args:
        name: Label used in recorded events.  Generated when omitted.
        config: Wait timeout defaults and event formatting.
        collector: Receives observer events.  Nothing is recorded without one.

    """

    __slots__ = (
        "_async_waiters",
        "_children",
        "_closed",
        "_collector",
        "_cond",
        "_config",
        "_history",
        "_name",
        "_unsubscribe",
    )

    def __init__(
        self,
        *,
        name: str | None = None,
        config: PerchConfig | None = None,
        collector: EventCollector | None = None,
    ) -> None:
        self._name = name if name is not None else f"observer-{next(_observer_ids)}"
        self._config = config if config is not None else DEFAULT_CONFIG
        self._collector = collector
        self._cond = threading.Condition(threading.RLock())
        self._history: list[T] = []
        self._children: list[Callable[[T], None]] = []
        self._async_waiters: list[AsyncWaiter] = []
        self._unsubscribe: Unsubscribe | None = None
        self._closed = False

    # ----- Construction -----

    @classmethod
    def create(
        cls,
        *,
        name: str | None = None,
        config: PerchConfig | None = None,
        collector: EventCollector | None = None,
    ) -> Self:
        """Create a detached observer with an empty history."""
        return cls(name=name, config=config, collector=collector)

    @classmethod
    def attach(
        cls,
        source: Subscribable[T],
        *,
        name: str | None = None,
        config: PerchConfig | None = None,
        collector: EventCollector | None = None,
    ) -> Self:
        """Create an observer and subscribe it to ``source``.

        A value the source replays synchronously while subscribing is
        recorded like any other.  If ``subscribe`` returns a callable it
        is kept and called by ``dispose()``.
        """
        observer = cls(name=name, config=config, collector=collector)
        handle = source.subscribe(observer.on_value)
        if callable(handle):
            with observer._cond:
                observer._unsubscribe = handle
        return observer

    @property
    def name(self) -> str:
        """Label used in recorded events."""
        return self._name

    # ----- Delivery -----

    def on_value(self, value: T) -> None:
        """Record a pushed value, wake waiters, then forward to children.

        Safe to call from a producer thread while other threads wait or
        assert.  Values delivered after ``dispose()`` are ignored.
        """
        with self._cond:
            if self._closed:
                return
            self._history.append(value)
            index = len(self._history) - 1
            self._cond.notify_all()
            waiters, self._async_waiters = self._async_waiters, []
            for waiter in waiters:
                waiter.wake()
            children = tuple(self._children)

        if self._collector is not None:
            self._collector.record_value(self._name, index, value)

        for child in children:
            child(value)

    __call__ = on_value

    # ----- Reading -----

    def value(self) -> T:
        """Return the most recently recorded value.

        Raises:
            NoValueRecorded: If no value has been recorded yet.

        """
        with self._cond:
            if not self._history:
                raise NoValueRecorded("Observer never received any value")
            return self._history[-1]

    def value_history(self) -> tuple[T, ...]:
        """Snapshot of all recorded values in arrival order."""
        with self._cond:
            return tuple(self._history)

    def __len__(self) -> int:
        with self._cond:
            return len(self._history)

    # ----- Blocking waits -----

    def await_value(self, timeout: Timeout = None) -> Self:
        """Block until the observer has any value.

        Returns immediately if a value is already recorded.  With a
        timeout, returns once it elapses even if nothing arrived; check
        with ``assert_has_value()`` afterwards.
        """
        return self._block(FIRST_VALUE, "value", timeout)

    def await_next_value(self, timeout: Timeout = None) -> Self:
        """Block until a value arrives after this call.

        Values recorded before the call do not count.  With a timeout,
        returns once it elapses even if nothing arrived.
        """
        with self._cond:
            gate = WaitGate(armed_at=len(self._history))
        return self._block(gate, "next", timeout)

    def _block(self, gate: WaitGate, kind: str, timeout: Timeout) -> Self:
        timeout = self._config.resolve_timeout(timeout)
        started = time.perf_counter()
        with self._cond:
            # A value recorded between arming and here already opens the gate
            opened = self._cond.wait_for(
                lambda: gate.is_open(len(self._history)), timeout
            )
        self._record_wait(kind, opened=opened, started=started)
        return self

    # ----- Async waits -----

    async def wait_value(self, timeout: Timeout = None) -> Self:
        """Suspend the current task until the observer has any value.

        The asyncio counterpart of ``await_value``: the event loop keeps
        running while the task waits.  Cancellation propagates.
        """
        return await self._suspend(FIRST_VALUE, "value", timeout)

    async def wait_next_value(self, timeout: Timeout = None) -> Self:
        """Suspend the current task until a value arrives after this call."""
        with self._cond:
            gate = WaitGate(armed_at=len(self._history))
        return await self._suspend(gate, "next", timeout)

    async def _suspend(self, gate: WaitGate, kind: str, timeout: Timeout) -> Self:
        timeout = self._config.resolve_timeout(timeout)
        loop = asyncio.get_running_loop()
        started = time.perf_counter()

        with self._cond:
            if gate.is_open(len(self._history)):
                waiter = None
            else:
                waiter = AsyncWaiter(gate=gate, loop=loop, future=loop.create_future())
                self._async_waiters.append(waiter)

        opened = True
        if waiter is not None:
            try:
                await asyncio.wait_for(waiter.future, timeout)
            except TimeoutError:
                opened = False
            finally:
                with self._cond:
                    if waiter in self._async_waiters:
                        self._async_waiters.remove(waiter)

        self._record_wait(kind, opened=opened, started=started)
        return self

    def _record_wait(self, kind: str, *, opened: bool, started: float) -> None:
        if self._collector is not None:
            self._collector.record_wait(
                self._name,
                kind,
                opened=opened,
                waited_ms=(time.perf_counter() - started) * 1000,
            )

    # ----- Derived observers -----

    def map[N](self, transform: Transform[T, N]) -> RecordingObserver[N]:
        """Derive an observer of ``transform(value)`` for every value.

        The derived observer starts with the current history mapped
        through ``transform`` and then receives every later value, also
        mapped.  It has its own waits and its own children.

        Useful when a source pushes a complex structure and the test only
        cares about one field of it.
        """
        with self._cond:
            child: RecordingObserver[N] = RecordingObserver(
                name=f"{self._name}.map{len(self._children) + 1}",
                config=self._config,
                collector=self._collector,
            )
            # Replay and registration share the lock with on_value, so
            # each value reaches the child exactly once and in order.
            for value in self._history:
                child.on_value(transform(value))
            replayed = len(self._history)

            def forward(value: T) -> None:
                child.on_value(transform(value))

            self._children.append(forward)

        if self._collector is not None:
            self._collector.record_map(self._name, child.name, replayed=replayed)
        return child

    # ----- Assertions -----

    def assert_has_value(self) -> Self:
        """Fail unless at least one value has been recorded."""
        with self._cond:
            if not self._history:
                raise NoValueRecorded("Observer never received any value")
        return self

    def assert_no_value(self) -> Self:
        """Fail if any value has been recorded."""
        with self._cond:
            if self._history:
                msg = f"Expected no value, but received: {self._history[-1]!r}"
                raise AssertionMismatch(msg)
        return self

    def assert_history_size(self, expected_size: int) -> Self:
        """Fail unless exactly ``expected_size`` values have been recorded."""
        size = len(self)
        if size != expected_size:
            msg = f"History size differ; Expected: {expected_size}, Actual: {size}"
            raise AssertionMismatch(msg)
        return self

    def assert_value(self, expected: T | None) -> Self:
        """Fail unless the latest value equals ``expected``.

        ``None`` matches a latest value of ``None``.
        """
        value = self.value()
        if value is expected or value == expected:
            return self
        msg = f"Expected: {_describe(expected)}, Actual: {_describe(value)}"
        raise AssertionMismatch(msg)

    def assert_value_matches(self, predicate: Predicate[T]) -> Self:
        """Fail unless ``predicate`` accepts the latest value."""
        value = self.value()
        if not predicate(value):
            msg = (
                f"Value {value!r} does not match predicate "
                f"{_describe_predicate(predicate)}"
            )
            raise AssertionMismatch(msg)
        return self

    def assert_never(self, predicate: Predicate[T]) -> Self:
        """Fail if ``predicate`` accepts any recorded value.

        Scans the whole history, oldest first, and reports the first
        matching position.
        """
        for index, value in enumerate(self.value_history()):
            if predicate(value):
                msg = (
                    f"Value at position {index} matches predicate "
                    f"{_describe_predicate(predicate)}, which was not expected."
                )
                raise AssertionMismatch(msg)
        return self

    # ----- Subscription hygiene -----

    def dispose(self) -> None:
        """Cancel the subscription and stop recording.  Idempotent.

        The recorded history stays available for assertions.
        """
        with self._cond:
            if self._closed:
                return
            self._closed = True
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            size = len(self._history)

        if unsubscribe is not None:
            unsubscribe()
        if self._collector is not None:
            self._collector.record_dispose(self._name, history_size=size)

    @property
    def disposed(self) -> bool:
        """True once ``dispose()`` has been called."""
        with self._cond:
            return self._closed

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"RecordingObserver(name={self._name!r}, values={len(self)})"


def observe[T](
    source: Subscribable[T],
    *,
    name: str | None = None,
    config: PerchConfig | None = None,
    collector: EventCollector | None = None,
) -> RecordingObserver[T]:
    """Subscribe a new RecordingObserver to ``source`` and return it."""
    return RecordingObserver.attach(source, name=name, config=config, collector=collector)
