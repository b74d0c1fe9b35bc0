#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Almanac project.

All user data lives under a single home directory, resolved once at import
time:

    $ALMANAC_HOME (default: ~/.almanac)/
    ├── journal.db      # SQLite backend
    ├── journal.yaml    # YAML backend
    ├── config.yaml     # Optional settings file
    ├── logs/           # Rotating operation and error logs
    └── exports/        # JSON/CSV/text exports

Setting ALMANAC_HOME redirects everything, which is what tests and
alternative profiles rely on.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_data_root() -> Path:
    """
    Determine the data root directory.

    Returns:
        ALMANAC_HOME if set, otherwise ~/.almanac, expanded and resolved
    """
    env = os.environ.get("ALMANAC_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".almanac").expanduser().resolve()


# ----- Data directory -----
DATA_DIR: Path = _get_data_root()

# --- Persistence ---
DB_PATH = DATA_DIR / "journal.db"
YAML_PATH = DATA_DIR / "journal.yaml"

# --- Configuration ---
CONFIG_PATH = DATA_DIR / "config.yaml"

# ---- Logs & Exports ----
LOG_DIR = DATA_DIR / "logs"
EXPORT_DIR = DATA_DIR / "exports"
