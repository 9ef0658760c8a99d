"""Perch error hierarchy.

All perch-specific errors inherit from PerchError for easy catching.
Assertion failures additionally inherit from ``AssertionError`` so test
runners report them as failures rather than errors.
"""


class PerchError(Exception):
    """Base error for all perch operations."""


class ConfigError(PerchError):
    """Invalid or missing configuration."""


class LifecycleError(PerchError):
    """A lifecycle registry refused a transition."""


class AssertionMismatch(PerchError, AssertionError):
    """An observer assertion did not hold."""


class NoValueRecorded(AssertionMismatch):
    """A value was required but the observer has recorded none."""
