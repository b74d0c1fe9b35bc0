#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Journal logging: one rotating operations log per component, a shared
error log, and warnings echoed to the console.

Layout under the log directory:

    <component>.log   every store mutation, persistence step and export
    errors.log        errors with context and traceback, all components

Records carry a tag and an optional JSON detail payload:

    2024-01-10 09:30:00 - store.operations - INFO - OPERATION - add_entry_completed: {"operation_id": ...}

Code that may run without a logger goes through `safe_logger()`, which hands
back a do-nothing NullLogger for None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
ERROR_LOG_NAME = "errors.log"


def _with_details(tag: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    """Render `TAG - message` with an optional JSON payload."""
    if not details:
        return f"{tag} - {message}"
    return f"{tag} - {message}: {json.dumps(details, default=str, sort_keys=True)}"


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """One-line CLI message for an error, optionally with the traceback."""
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        return f"{message}\n\n{traceback.format_exc()}"
    return message


class AlmanacLogger:
    """
    Logger for one journal component (store, cli, export...).

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix of the logger names and of the operations file
        operations: Logger for the component's operations log
        errors: Logger for the shared error log
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "almanac",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        console_level: int = logging.WARNING,
    ) -> None:
        """
        Args:
            log_dir: Directory for log files (created if missing)
            component_name: Component label, e.g. 'store' or 'cli'
            max_bytes: Size at which a log file rotates (default: 5MB)
            backup_count: Rotated files kept per log (default: 3)
            console_level: Minimum level echoed to the console
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.operations = self._build(
            f"{component_name}.operations",
            logging.DEBUG,
            self.log_dir / f"{component_name}.log",
        )
        self.errors = self._build(
            f"{component_name}.errors", logging.ERROR, self.log_dir / ERROR_LOG_NAME
        )

        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.operations.addHandler(console)

    def _build(self, name: str, level: int, path: Path) -> logging.Logger:
        """Named logger with a fresh rotating file handler."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Re-creating a component logger must not stack handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        handler = RotatingFileHandler(
            path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Close and detach all handlers (releases log files)."""
        for logger in (self.operations, self.errors):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ---- Records ----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed operation with its details."""
        self.operations.info(_with_details("OPERATION", operation, details or {}))

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Record an error in both the component log and the error log.

        The traceback is only written to the error log.
        """
        line = _with_details("ERROR", f"{type(error).__name__}: {error}", context)
        self.operations.error(line)
        self.errors.error(f"{line}\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.operations.debug(_with_details("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.operations.info(_with_details("INFO", message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.operations.warning(_with_details("WARNING", message, details))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and build the message shown to the user.

        Examples:
            >>> logger.log_cli_error(CategoryInUseError("Health", 2))
            "❌ CategoryInUseError: Category 'Health' is used by 2 entries"
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    Logs through the context logger when one exists, prints the one-line
    message to stderr (with traceback under --verbose) and calls sys.exit().

    Args:
        ctx: Click context; reads obj["logger"] and obj["verbose"]
        error: The exception that ended the command
        operation: Command label, e.g. 'category_delete'
        additional_context: Extra identifiers worth logging (ids, paths)
        exit_code: Process exit code (default: 1)
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Stand-in with the AlmanacLogger interface that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[AlmanacLogger]) -> AlmanacLogger:
    """
    Return `logger`, or the shared NullLogger when it is None.

        safe_logger(self.logger).log_debug("store_loaded", {"entries": 3})
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
