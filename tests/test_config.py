"""Tests for perch.config and perch.config_loader."""

from pathlib import Path

import pytest

from perch._errors import ConfigError
from perch.config import PerchConfig
from perch.config_loader import load_config


class TestPerchConfig:
    """PerchConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = PerchConfig()
        assert config.wait_timeout is None
        assert config.max_events == 10_000
        assert config.value_repr_limit == 200

    def test_frozen(self) -> None:
        config = PerchConfig()
        with pytest.raises(AttributeError):
            config.max_events = 5  # type: ignore[misc]

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ConfigError, match="wait_timeout"):
            PerchConfig(wait_timeout=-1.0)

    def test_non_numeric_timeout_rejected(self) -> None:
        with pytest.raises(ConfigError, match="wait_timeout"):
            PerchConfig(wait_timeout="soon")  # type: ignore[arg-type]

    def test_zero_max_events_rejected(self) -> None:
        with pytest.raises(ConfigError, match="max_events"):
            PerchConfig(max_events=0)

    def test_explicit_timeout_wins(self) -> None:
        config = PerchConfig(wait_timeout=5.0)
        assert config.resolve_timeout(0.5) == 0.5
        assert config.resolve_timeout(None) == 5.0

    def test_unbounded_by_default(self) -> None:
        assert PerchConfig().resolve_timeout(None) is None

    def test_clip_repr_short_value_untouched(self) -> None:
        assert PerchConfig().clip_repr("abc") == "'abc'"

    def test_clip_repr_truncates(self) -> None:
        config = PerchConfig(value_repr_limit=10)
        clipped = config.clip_repr("x" * 50)
        assert len(clipped) == 10
        assert clipped.endswith("...")


class TestLoadConfig:
    """load_config() — file discovery and override merging."""

    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == PerchConfig()

    def test_yaml_file(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("wait_timeout: 2.5\nmax_events: 50\n")
        config = load_config(tmp_path)
        assert config.wait_timeout == 2.5
        assert config.max_events == 50

    def test_yaml_perch_section(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yml").write_text("perch:\n  value_repr_limit: 40\n")
        assert load_config(tmp_path).value_repr_limit == 40

    def test_toml_file(self, tmp_path: Path) -> None:
        (tmp_path / "perch.toml").write_text("wait_timeout = 1.0\n")
        assert load_config(tmp_path).wait_timeout == 1.0

    def test_pyproject_tool_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "demo"\n\n[tool.perch]\nwait_timeout = 3\n'
        )
        assert load_config(tmp_path).wait_timeout == 3

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
        assert load_config(tmp_path) == PerchConfig()

    def test_yaml_preferred_over_toml(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("max_events: 7\n")
        (tmp_path / "perch.toml").write_text("max_events = 9\n")
        assert load_config(tmp_path).max_events == 7

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("wait_timeout: 2.5\n")
        assert load_config(tmp_path, wait_timeout=0.1).wait_timeout == 0.1

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("colour: blue\nmax_events: 3\n")
        assert load_config(tmp_path).max_events == 3

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("wait_timeout: [1, 2\n")
        with pytest.raises(ConfigError, match="perch.yaml"):
            load_config(tmp_path)

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_malformed_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "perch.toml").write_text("wait_timeout = \n")
        with pytest.raises(ConfigError, match="perch.toml"):
            load_config(tmp_path)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        (tmp_path / "perch.yaml").write_text("max_events: many\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_unknown_override_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path, colour="blue")
