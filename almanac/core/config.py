#!/usr/bin/env python3
"""
config.py
--------------------
User settings for the Almanac journal.

Settings come from an optional YAML file (default: CONFIG_PATH). Every key
is optional; missing keys fall back to defaults and unknown keys are
rejected so typos do not silently disable a setting.

Example config.yaml:
    note_max_length: 120
    streak_policy: current
    default_period: month
    backend: yaml
    data_path: ~/journals/wins.yaml
    top_categories: 5
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from almanac.dataclasses import Period, StreakPolicy
from .exceptions import ConfigError
from .paths import CONFIG_PATH, DB_PATH, LOG_DIR, YAML_PATH

BACKENDS = ("sqlite", "yaml", "memory")


@dataclass(frozen=True)
class Settings:
    """
    Journal settings.

    Attributes:
        note_max_length: Maximum characters allowed in an entry note
        streak_policy: Whether a stale most-recent day still counts as a streak
        default_period: Window used by stats commands when none is given
        backend: Persistence backend name ("sqlite", "yaml" or "memory")
        data_path: Storage file; None picks the backend default
        log_dir: Directory for rotating logs
        top_categories: How many categories breakdowns show
    """

    note_max_length: int = 150
    streak_policy: StreakPolicy = StreakPolicy.ANCHORED
    default_period: Period = Period.MONTH
    backend: str = "sqlite"
    data_path: Optional[Path] = None
    log_dir: Path = LOG_DIR
    top_categories: int = 5

    @property
    def resolved_data_path(self) -> Optional[Path]:
        """Storage file for the configured backend (None for memory)."""
        if self.backend == "memory":
            return None
        if self.data_path is not None:
            return self.data_path
        return DB_PATH if self.backend == "sqlite" else YAML_PATH

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with non-None overrides applied and validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **_coerce(changes)) if changes else self


def _coerce(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and convert raw setting values.

    Raises:
        ConfigError: On unknown keys or invalid values
    """
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        try:
            if key in ("note_max_length", "top_categories"):
                number = int(value)
                if number <= 0:
                    raise ValueError("must be positive")
                values[key] = number
            elif key == "streak_policy":
                values[key] = StreakPolicy(str(value).lower())
            elif key == "default_period":
                values[key] = Period(str(value).lower())
            elif key == "backend":
                backend = str(value).lower()
                if backend not in BACKENDS:
                    raise ValueError(f"expected one of {', '.join(BACKENDS)}")
                values[key] = backend
            elif key in ("data_path", "log_dir"):
                values[key] = Path(value).expanduser()
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid {key}: {value!r} ({e})")
    return values


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Settings file; defaults to CONFIG_PATH. A missing file yields
            default settings.

    Returns:
        Settings instance

    Raises:
        ConfigError: If the file is not valid YAML, is not a mapping, or
            holds unknown keys or invalid values
    """
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        return Settings()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse settings file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    return Settings(**_coerce(data))
