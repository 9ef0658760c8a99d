"""Lifecycle registry — the state machine a LifecycleDriver adapts.

Models a component lifecycle as ordered states::

    DESTROYED < INITIALIZED < CREATED < STARTED < RESUMED

and six events that each name a target state.  Pausing and stopping move
back down the same ladder (``ON_PAUSE`` lands in STARTED, ``ON_STOP`` in
CREATED).  Handling an event jumps straight to its target state and
reports every intermediate step to lifecycle observers, so an observer
always sees a contiguous event sequence.

The registry does not check that events arrive in a sensible order; it
only refuses to leave DESTROYED and to destroy a never-created component.

Thread Safety:
    State and the observer list are protected by a ``threading.Lock``.
    Observer callbacks run outside the lock, on a snapshot.

"""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING

from perch._errors import LifecycleError

if TYPE_CHECKING:
    from perch._types import LifecycleCallback


class LifecycleState(Enum):
    """Lifecycle states, ordered by readiness."""

    DESTROYED = 0
    INITIALIZED = 1
    CREATED = 2
    STARTED = 3
    RESUMED = 4

    def is_at_least(self, other: LifecycleState) -> bool:
        """True if this state is ``other`` or further along."""
        return self.value >= other.value


class LifecycleEvent(Enum):
    """Lifecycle events and the state each one leads to."""

    ON_CREATE = "create"
    ON_START = "start"
    ON_RESUME = "resume"
    ON_PAUSE = "pause"
    ON_STOP = "stop"
    ON_DESTROY = "destroy"

    @property
    def target_state(self) -> LifecycleState:
        """State the lifecycle is in after this event."""
        return _TARGET_STATES[self]


_TARGET_STATES: dict[LifecycleEvent, LifecycleState] = {
    LifecycleEvent.ON_CREATE: LifecycleState.CREATED,
    LifecycleEvent.ON_START: LifecycleState.STARTED,
    LifecycleEvent.ON_RESUME: LifecycleState.RESUMED,
    LifecycleEvent.ON_PAUSE: LifecycleState.STARTED,
    LifecycleEvent.ON_STOP: LifecycleState.CREATED,
    LifecycleEvent.ON_DESTROY: LifecycleState.DESTROYED,
}

# One step up the ladder from a state, and one step down
_UP_EVENTS: dict[LifecycleState, LifecycleEvent] = {
    LifecycleState.INITIALIZED: LifecycleEvent.ON_CREATE,
    LifecycleState.CREATED: LifecycleEvent.ON_START,
    LifecycleState.STARTED: LifecycleEvent.ON_RESUME,
}
_DOWN_EVENTS: dict[LifecycleState, LifecycleEvent] = {
    LifecycleState.RESUMED: LifecycleEvent.ON_PAUSE,
    LifecycleState.STARTED: LifecycleEvent.ON_STOP,
    LifecycleState.CREATED: LifecycleEvent.ON_DESTROY,
}


def event_path(
    current: LifecycleState, target: LifecycleState
) -> tuple[LifecycleEvent, ...]:
    """Events that walk the ladder from ``current`` to ``target``, in order."""
    events: list[LifecycleEvent] = []
    state = current
    while state is not target:
        step = _UP_EVENTS[state] if target.value > state.value else _DOWN_EVENTS[state]
        events.append(step)
        state = step.target_state
    return tuple(events)


class LifecycleRegistry:
    """Holds the current lifecycle state and notifies lifecycle observers.

    Observers are callables taking ``(event, state)``.  An observer added
    after the lifecycle has advanced is first walked up to the current
    state, so it never misses the events leading there.

    """

    __slots__ = ("_lock", "_observers", "_state")

    def __init__(self) -> None:
        self._state = LifecycleState.INITIALIZED
        self._observers: list[LifecycleCallback] = []
        self._lock = threading.Lock()

    @property
    def current_state(self) -> LifecycleState:
        """The present lifecycle state."""
        with self._lock:
            return self._state

    def handle_event(self, event: LifecycleEvent) -> LifecycleState:
        """Move to ``event.target_state`` and notify observers.

        Returns:
            The new current state.

        Raises:
            LifecycleError: If the lifecycle is already destroyed, or the
                event destroys a lifecycle that was never created.

        """
        target = event.target_state
        with self._lock:
            current = self._state
            if current is target:
                return current
            if current is LifecycleState.DESTROYED:
                msg = f"Lifecycle is DESTROYED and cannot handle {event.name}"
                raise LifecycleError(msg)
            if current is LifecycleState.INITIALIZED and target is LifecycleState.DESTROYED:
                msg = "Lifecycle must be at least CREATED before it can be destroyed"
                raise LifecycleError(msg)
            self._state = target
            observers = tuple(self._observers)

        steps = event_path(current, target)
        for step in steps:
            for callback in observers:
                callback(step, step.target_state)
        return target

    def add_observer(self, callback: LifecycleCallback) -> None:
        """Register a lifecycle observer and catch it up to the current state."""
        with self._lock:
            self._observers.append(callback)
            current = self._state

        if current is LifecycleState.DESTROYED:
            return
        for step in event_path(LifecycleState.INITIALIZED, current):
            callback(step, step.target_state)

    def remove_observer(self, callback: LifecycleCallback) -> None:
        """Remove a lifecycle observer.  Unknown observers are ignored."""
        with self._lock:
            if callback in self._observers:
                self._observers.remove(callback)

    @property
    def observer_count(self) -> int:
        """Number of registered lifecycle observers."""
        with self._lock:
            return len(self._observers)
