"""Lifecycle layer — a hand-driven component lifecycle for tests."""

from perch.lifecycle.driver import LifecycleDriver
from perch.lifecycle.registry import LifecycleEvent, LifecycleRegistry, LifecycleState

__all__ = [
    "LifecycleDriver",
    "LifecycleEvent",
    "LifecycleRegistry",
    "LifecycleState",
]
