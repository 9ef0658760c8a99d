"""Tests for perch package exports and metadata."""

import pytest

import perch


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(perch.__version__, str)
        assert "0.1.0" in perch.__version__

    def test_free_threading_declaration(self) -> None:
        assert perch._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in perch.__all__:
            assert getattr(perch, name) is not None

    def test_lazy_exports_are_the_real_objects(self) -> None:
        from perch.lifecycle.driver import LifecycleDriver
        from perch.observing.observer import RecordingObserver, observe

        assert perch.RecordingObserver is RecordingObserver
        assert perch.observe is observe
        assert perch.LifecycleDriver is LifecycleDriver

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            perch.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
