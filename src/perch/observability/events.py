"""Event model for observer and lifecycle activity.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.
    Producers record from their own thread; tests read from theirs.

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Observer events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValueRecorded:
    """An observer appended a value to its history.

    Attributes:
        source: Name of the recording observer.
        index: Position of the value in the observer's history.
        value_repr: Truncated ``repr`` of the value.
        thread: Name of the thread that delivered the value.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    index: int
    value_repr: str
    thread: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class WaitFinished:
    """A blocking or async wait returned control to its caller.

    Attributes:
        source: Name of the observer waited on.
        kind: ``"value"`` for await_value, ``"next"`` for await_next_value.
        opened: True if the gate opened, False if the timeout elapsed.
        waited_ms: Time spent waiting in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    kind: Literal["value", "next"]
    opened: bool
    waited_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ObserverMapped:
    """A derived observer was created with ``map``.

    Attributes:
        source: Name of the parent observer.
        child: Name of the derived observer.
        replayed: Number of history values replayed into the child.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    child: str
    replayed: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ObserverDisposed:
    """An observer stopped recording and released its subscription."""

    source: str
    history_size: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Lifecycle events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LifecycleTransition:
    """A lifecycle driver sent one event to its registry.

    Attributes:
        source: Name of the driver.
        event: Lifecycle event name (e.g. ``"ON_START"``).
        previous: State name before the event.
        current: State name after the event.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    event: str
    previous: str
    current: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type PerchEvent = (
    ValueRecorded
    | WaitFinished
    | ObserverMapped
    | ObserverDisposed
    | LifecycleTransition
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
