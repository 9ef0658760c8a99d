"""The producer contract a RecordingObserver subscribes to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from perch._types import Unsubscribe, ValueCallback


@runtime_checkable
class Subscribable[T](Protocol):
    """Anything that pushes values of type ``T`` to a registered callback.

    ``subscribe`` may invoke the callback synchronously before returning
    (replay of the latest value) and any number of times afterwards, from
    any thread.  It may return a callable that cancels the subscription.
    """

    def subscribe(self, callback: ValueCallback[T]) -> Unsubscribe | None: ...
