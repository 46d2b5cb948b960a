"""Configuration loading and validation.

Usage:
    config = load("clover-report.yaml")              # raises ConfigError on bad config
    config = load(None)                               # defaults + environment only
    enabled = colors_enabled(os.environ)              # NO_COLOR switch

The configuration file is optional. When present it may set:

    project_root: "."
    thresholds:
      good: 90
      warning: 75
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

DEFAULT_CONFIG_PATH = "clover-report.yaml"

_FALSY = frozenset({"", "0", "false", "no", "off"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    project_root: Path
    good_threshold: float = 90.0
    warning_threshold: float = 75.0


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str | None = DEFAULT_CONFIG_PATH, *, required: bool = False,
         project_root: str | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    A missing file is only an error when *required* is set (the user named
    the file explicitly). *project_root* (the ``--root`` option) wins over
    the CLOVER_REPORT_ROOT environment variable, which wins over the file's
    ``project_root``; relative roots are taken from the current working
    directory.

    Raises:
        ConfigError: if the file is required but missing, malformed, or holds
                     invalid values.
    """
    raw: dict = {}
    if config_path:
        path = Path(config_path)
        if path.exists():
            raw = _read_yaml(path)
        elif required:
            raise ConfigError(f"Config file not found: '{config_path}'")

    thresholds = raw.get("thresholds") or {}
    if not isinstance(thresholds, dict):
        raise ConfigError("'thresholds' must be a mapping with 'good' and 'warning' keys.")

    root = project_root or os.environ.get("CLOVER_REPORT_ROOT") or raw.get("project_root") or "."

    config = Config(
        project_root=Path(str(root)).expanduser().resolve(),
        good_threshold=_number(thresholds.get("good", 90.0), "thresholds.good"),
        warning_threshold=_number(thresholds.get("warning", 75.0), "thresholds.warning"),
    )
    _validate(config)
    return config


def _read_yaml(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{path}' must be a YAML mapping at the top level.")
    return raw


def _number(value, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"'{name}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a number, got {value!r}") from None


def _validate(config: Config) -> None:
    """Raise ConfigError if any field holds an unusable value."""
    errors: list[str] = []

    if not config.project_root.is_dir():
        errors.append(
            f"  - project root '{config.project_root}' is not a directory"
        )
    for name, value in (("thresholds.good", config.good_threshold),
                        ("thresholds.warning", config.warning_threshold)):
        if not 0 <= value <= 100:
            errors.append(f"  - '{name}' must be between 0 and 100, got {value:g}")
    if config.warning_threshold > config.good_threshold:
        errors.append("  - 'thresholds.warning' must not exceed 'thresholds.good'")

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Environment switches
# ---------------------------------------------------------------------------

def colors_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """False when NO_COLOR holds any truthy value."""
    env = os.environ if environ is None else environ
    value = env.get("NO_COLOR")
    if value is None:
        return True
    return value.strip().lower() in _FALSY
