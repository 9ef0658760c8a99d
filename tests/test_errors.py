"""Tests for perch._errors."""

import pytest

from perch._errors import (
    AssertionMismatch,
    ConfigError,
    LifecycleError,
    NoValueRecorded,
    PerchError,
)


class TestErrorHierarchy:
    """All perch errors inherit from PerchError."""

    def test_perch_error_is_exception(self) -> None:
        assert issubclass(PerchError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, PerchError)

    def test_lifecycle_error_inherits(self) -> None:
        assert issubclass(LifecycleError, PerchError)

    def test_assertion_mismatch_is_assertion_error(self) -> None:
        """Test runners report mismatches as failures."""
        assert issubclass(AssertionMismatch, PerchError)
        assert issubclass(AssertionMismatch, AssertionError)

    def test_no_value_recorded_is_mismatch(self) -> None:
        assert issubclass(NoValueRecorded, AssertionMismatch)
        assert issubclass(NoValueRecorded, AssertionError)

    def test_catch_all_perch_errors(self) -> None:
        """All specific errors are catchable via PerchError."""
        for error_cls in (ConfigError, LifecycleError, AssertionMismatch, NoValueRecorded):
            with pytest.raises(PerchError):
                raise error_cls("test")

    def test_message_preserved(self) -> None:
        with pytest.raises(AssertionMismatch, match="History size differ"):
            raise AssertionMismatch("History size differ; Expected: 1, Actual: 2")
