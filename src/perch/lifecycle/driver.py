"""Lifecycle driver — advance a lifecycle by hand from a test.

A thin adapter over ``LifecycleRegistry``: every method sends exactly one
event and returns the driver, so transitions read as a chain::

    driver = LifecycleDriver.initialized().create().start()
    assert driver.current_state is LifecycleState.STARTED

The driver does not check event order; the registry decides what an
out-of-order event means.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Self

from perch.lifecycle.registry import LifecycleEvent, LifecycleRegistry, LifecycleState

if TYPE_CHECKING:
    from perch.observability.collector import EventCollector

_driver_ids = itertools.count(1)


class LifecycleDriver:
    """Manually advanced lifecycle for components under test.

    Args:
        registry: The lifecycle to drive.  A fresh one when omitted.
        name: Label used in recorded events.
        collector: Receives one ``LifecycleTransition`` per event sent.

    """

    __slots__ = ("_collector", "_name", "_registry")

    def __init__(
        self,
        registry: LifecycleRegistry | None = None,
        *,
        name: str | None = None,
        collector: EventCollector | None = None,
    ) -> None:
        self._registry = registry if registry is not None else LifecycleRegistry()
        self._name = name if name is not None else f"lifecycle-{next(_driver_ids)}"
        self._collector = collector

    @classmethod
    def initialized(
        cls,
        *,
        name: str | None = None,
        collector: EventCollector | None = None,
    ) -> Self:
        """A driver with no transitions applied."""
        return cls(name=name, collector=collector)

    @classmethod
    def resumed(
        cls,
        *,
        name: str | None = None,
        collector: EventCollector | None = None,
    ) -> Self:
        """A driver taken through create, start and resume."""
        return cls.initialized(name=name, collector=collector).create().start().resume()

    @property
    def current_state(self) -> LifecycleState:
        """The lifecycle's present state."""
        return self._registry.current_state

    @property
    def lifecycle(self) -> LifecycleRegistry:
        """The driven registry, for components that observe it."""
        return self._registry

    @property
    def name(self) -> str:
        return self._name

    def create(self) -> Self:
        return self._handle(LifecycleEvent.ON_CREATE)

    def start(self) -> Self:
        return self._handle(LifecycleEvent.ON_START)

    def resume(self) -> Self:
        return self._handle(LifecycleEvent.ON_RESUME)

    def pause(self) -> Self:
        return self._handle(LifecycleEvent.ON_PAUSE)

    def stop(self) -> Self:
        return self._handle(LifecycleEvent.ON_STOP)

    def destroy(self) -> Self:
        return self._handle(LifecycleEvent.ON_DESTROY)

    def _handle(self, event: LifecycleEvent) -> Self:
        previous = self._registry.current_state
        current = self._registry.handle_event(event)
        if self._collector is not None:
            self._collector.record_transition(
                self._name,
                event.name,
                previous=previous.name,
                current=current.name,
            )
        return self

    def __repr__(self) -> str:
        return f"LifecycleDriver(name={self._name!r}, state={self.current_state.name})"
