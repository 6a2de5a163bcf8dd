"""Load HistoryConfig from hindsight.yaml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import yaml

from hindsight.config import HistoryConfig

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({
    "max_events",
    "encoding",
    "watch_debounce_ms",
    "watch_step_ms",
})


def load_config(root: Path, **overrides: object) -> HistoryConfig:
    """Load HistoryConfig from root, optionally merging hindsight.yaml.

    Looks for hindsight.yaml, hindsight.yml, or hindsight.toml in root. If
    found, loads and merges with overrides. Overrides take precedence.
    Invalid values raise ConfigError from HistoryConfig itself.
    """
    file_config = _read_config_file(Path(root))
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return HistoryConfig(**merged)  # type: ignore[arg-type]


def _read_config_file(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("hindsight.yaml", "hindsight.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "hindsight.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    return _flatten_section(data)


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Extract hindsight.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("hindsight")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
