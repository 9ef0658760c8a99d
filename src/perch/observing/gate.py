"""Wait gates — single-fire signals armed at a history position.

A gate opens once the observer's history grows past the position it was
armed at.  ``await_value`` waits on a gate armed at 0 (any value at all),
``await_next_value`` arms a fresh gate at the current history size, so the
values already recorded can never open it.

Gates carry no lock of their own: they are created and checked only while
the owning observer's condition is held, in the same critical section that
appends to the history.  That shared lock is what rules out lost wakeups.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WaitGate:
    """A wait token armed at ``armed_at`` recorded values.

    Attributes:
        armed_at: History size when the gate was armed.

    """

    armed_at: int

    def is_open(self, history_size: int) -> bool:
        """True once a value has been recorded after the gate was armed."""
        return history_size > self.armed_at


FIRST_VALUE = WaitGate(armed_at=0)


@dataclass(frozen=True, slots=True)
class AsyncWaiter:
    """A task suspended on a gate, woken through its own event loop.

    The producer may run on any thread, so the future is always settled
    via ``loop.call_soon_threadsafe``.
    """

    gate: WaitGate
    loop: asyncio.AbstractEventLoop
    future: asyncio.Future[None]

    def wake(self) -> None:
        """Schedule the future's completion on the waiter's loop."""
        self.loop.call_soon_threadsafe(self._settle)

    def _settle(self) -> None:
        # Timed out or cancelled waits leave a finished future behind
        if not self.future.done():
            self.future.set_result(None)
