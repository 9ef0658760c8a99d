"""Shared type definitions for perch."""

from collections.abc import Callable
from typing import Any

# Callback that receives one pushed value
type ValueCallback[T] = Callable[[T], None]

# Handle returned by a source to cancel a subscription
type Unsubscribe = Callable[[], None]

# Value transform used by RecordingObserver.map
type Transform[T, N] = Callable[[T], N]

# Predicate used by value assertions
type Predicate[T] = Callable[[T], bool]

# Wait timeout in seconds (None = no bound)
type Timeout = float | None

# Lifecycle observer callback: (event, new_state)
type LifecycleCallback = Callable[[Any, Any], None]
