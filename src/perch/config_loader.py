"""Load PerchConfig from perch.yaml, perch.toml or pyproject.toml.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from dataclasses import fields
from pathlib import Path

import yaml

from perch._errors import ConfigError
from perch.config import PerchConfig

_KNOWN_KEYS = frozenset(f.name for f in fields(PerchConfig))


def load_config(root: Path, **overrides: object) -> PerchConfig:
    """Load PerchConfig from root, optionally merging a config file.

    Looks for perch.yaml, perch.yml, perch.toml, then the ``[tool.perch]``
    table of pyproject.toml, in that order. The first file found is used.
    Unknown keys are ignored.

    Raises:
        ConfigError: If the file cannot be read or parsed, or a value is
            invalid.

    """
    file_config = _read_perch_config(Path(root))
    merged = {**file_config, **overrides}
    try:
        return PerchConfig(**merged)  # type: ignore[arg-type]
    except TypeError as exc:
        raise ConfigError(str(exc)) from exc


def _read_perch_config(root: Path) -> dict[str, object]:
    """Read perch config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("perch.yaml", "perch.yml"):
        path = root / name
        if path.is_file():
            return _select_keys(_parse_yaml(path))
    toml_path = root / "perch.toml"
    if toml_path.is_file():
        return _select_keys(_parse_toml(toml_path))
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _parse_toml(pyproject).get("tool")
        if isinstance(tool, dict):
            return _select_keys(tool.get("perch") or {})
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc


def _select_keys(data: object) -> dict[str, object]:
    """Keep PerchConfig fields, looking inside a top-level ``perch`` section too."""
    if not isinstance(data, dict):
        msg = f"perch config must be a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    result: dict[str, object] = {}
    section = data.get("perch")
    if isinstance(section, dict):
        result.update((k, v) for k, v in section.items() if k in _KNOWN_KEYS)
    result.update((k, v) for k, v in data.items() if k in _KNOWN_KEYS)
    return result
