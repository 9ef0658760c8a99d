"""Observing layer — records values pushed by a source for assertions.

Connects a source's push callback to a thread-safe history with blocking
and async waits, derived observers, and chainable assertions.
"""

from perch.observing.gate import WaitGate
from perch.observing.observer import RecordingObserver, observe
from perch.observing.source import Subscribable

__all__ = [
    "RecordingObserver",
    "Subscribable",
    "WaitGate",
    "observe",
]
