#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Logger setup shared by the almanac commands.

Command logs live under `<log_dir>/operations/`, next to nothing else, so a
log directory can be wiped without touching journal data.
"""
import logging
from pathlib import Path

from almanac.core.logging_manager import AlmanacLogger


def setup_logger(log_dir: Path, component_name: str, verbose: bool = False) -> AlmanacLogger:
    """
    Build the logger for a CLI component.

    Args:
        log_dir: Base log directory (Settings.log_dir)
        component_name: Component label, e.g. 'cli'
        verbose: Echo INFO records to the console instead of warnings only

    Returns:
        AlmanacLogger writing to <log_dir>/operations
    """
    return AlmanacLogger(
        Path(log_dir) / "operations",
        component_name=component_name,
        console_level=logging.INFO if verbose else logging.WARNING,
    )
