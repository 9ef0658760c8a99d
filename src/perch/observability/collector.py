"""Event collector — records observer and lifecycle activity.

Provides one method per event kind so observers and drivers never build
event objects themselves.  An observer created without a collector
records nothing.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from producer threads and the test thread.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from perch.config import DEFAULT_CONFIG
from perch.observability.events import (
    LifecycleTransition,
    ObserverDisposed,
    ObserverMapped,
    ValueRecorded,
    WaitFinished,
    now_ns,
)
from perch.observability.log import EventLog

if TYPE_CHECKING:
    from perch.config import PerchConfig


class EventCollector:
    """Records perch events into an ``EventLog``.

    Args:
        log: The EventLog to store events in.  When omitted, a new log is
            created with ``config.max_events`` capacity.
        config: Used for log capacity and value repr truncation.

    """

    __slots__ = ("_config", "_log")

    def __init__(
        self,
        log: EventLog | None = None,
        *,
        config: PerchConfig | None = None,
    ) -> None:
        self._config = config if config is not None else DEFAULT_CONFIG
        self._log = log if log is not None else EventLog(self._config.max_events)

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Observer events -----

    def record_value(self, source: str, index: int, value: object) -> None:
        """Record a value appended to an observer's history."""
        self._log.append(
            ValueRecorded(
                source=source,
                index=index,
                value_repr=self._config.clip_repr(value),
                thread=threading.current_thread().name,
                timestamp_ns=now_ns(),
            )
        )

    def record_wait(
        self,
        source: str,
        kind: str,
        *,
        opened: bool,
        waited_ms: float = 0.0,
    ) -> None:
        """Record the end of a wait."""
        self._log.append(
            WaitFinished(
                source=source,
                kind=kind,  # type: ignore[arg-type]
                opened=opened,
                waited_ms=waited_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_map(self, source: str, child: str, *, replayed: int = 0) -> None:
        """Record creation of a derived observer."""
        self._log.append(
            ObserverMapped(
                source=source,
                child=child,
                replayed=replayed,
                timestamp_ns=now_ns(),
            )
        )

    def record_dispose(self, source: str, *, history_size: int = 0) -> None:
        """Record an observer being disposed."""
        self._log.append(
            ObserverDisposed(
                source=source,
                history_size=history_size,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Lifecycle events -----

    def record_transition(
        self,
        source: str,
        event: str,
        *,
        previous: str,
        current: str,
    ) -> None:
        """Record one lifecycle event handled by a driver."""
        self._log.append(
            LifecycleTransition(
                source=source,
                event=event,
                previous=previous,
                current=current,
                timestamp_ns=now_ns(),
            )
        )
