"""Perch — record and assert on values pushed by reactive sources.

A test-side observer for anything that pushes values to a callback,
possibly from another thread.  Record every value, wait for the first or
the next one, derive mapped views of the history, and assert on it.
A small lifecycle driver brings lifecycle-aware sources into the state
they need before they start emitting.

Quick start::

    from perch import LifecycleDriver, observe

    lifecycle = LifecycleDriver.resumed()
    observer = observe(source)

    observer.await_value(timeout=1.0).assert_has_value().assert_value(42)
    observer.map(len).assert_never(lambda n: n > 10)

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "AssertionMismatch",
    "EventCollector",
    "LifecycleDriver",
    "LifecycleState",
    "NoValueRecorded",
    "PerchConfig",
    "PerchError",
    "RecordingObserver",
    "Subscribable",
    "__version__",
    "load_config",
    "observe",
]

_LAZY_EXPORTS: dict[str, str] = {
    "AssertionMismatch": "perch._errors",
    "NoValueRecorded": "perch._errors",
    "PerchError": "perch._errors",
    "PerchConfig": "perch.config",
    "load_config": "perch.config_loader",
    "EventCollector": "perch.observability.collector",
    "LifecycleDriver": "perch.lifecycle.driver",
    "LifecycleState": "perch.lifecycle.registry",
    "RecordingObserver": "perch.observing.observer",
    "observe": "perch.observing.observer",
    "Subscribable": "perch.observing.source",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
