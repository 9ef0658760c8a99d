"""Observability — structured event log for observers and lifecycle drivers.

Records what happened during a test, in order, with nanosecond timestamps:
- **Observers**: values recorded, waits finished, derived observers, disposal
- **Lifecycle drivers**: every event sent to the lifecycle registry

All events are frozen dataclasses, safe for concurrent production from
producer threads while the test thread reads.

Quick Start:
    >>> from perch.observability import EventCollector
    >>> collector = EventCollector()
    >>> # Pass collector to RecordingObserver.create() or LifecycleDriver
    >>> # then inspect collector.log.query(event_type=ValueRecorded)

"""

from perch.observability.collector import EventCollector
from perch.observability.events import (
    LifecycleTransition,
    ObserverDisposed,
    ObserverMapped,
    PerchEvent,
    ValueRecorded,
    WaitFinished,
    now_ns,
)
from perch.observability.log import EventLog

__all__ = [
    "EventCollector",
    "EventLog",
    "LifecycleTransition",
    "ObserverDisposed",
    "ObserverMapped",
    "PerchEvent",
    "ValueRecorded",
    "WaitFinished",
    "now_ns",
]
