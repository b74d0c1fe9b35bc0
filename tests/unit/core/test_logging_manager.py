"""
test_logging_manager.py
-----------------------
Unit tests for almanac.core.logging_manager.

Tests cover:
- AlmanacLogger file output
- NullLogger (Null Object pattern)
- safe_logger helper
- handle_cli_error exit behaviour
"""
from unittest.mock import MagicMock

import click
import pytest

from almanac.core.exceptions import CategoryInUseError
from almanac.core.logging_manager import (
    AlmanacLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestAlmanacLogger:
    """Tests for AlmanacLogger file handling."""

    def test_creates_log_directory(self, tmp_path):
        """Logger should create its directory on demand."""
        log_dir = tmp_path / "logs" / "operations"
        AlmanacLogger(log_dir, "store")
        assert log_dir.is_dir()

    def test_operation_written_to_component_log(self, tmp_path):
        """Operations should land in <component>.log."""
        logger = AlmanacLogger(tmp_path, "store")
        logger.log_operation("add_entry", {"entry_id": "abc"})
        logger.close()

        content = (tmp_path / "store.log").read_text()
        assert "add_entry" in content
        assert "abc" in content

    def test_errors_written_to_error_log(self, tmp_path):
        """Errors should also land in errors.log."""
        logger = AlmanacLogger(tmp_path, "store")
        logger.log_error(ValueError("boom"), {"operation": "save"})
        logger.close()

        assert "boom" in (tmp_path / "errors.log").read_text()

    def test_log_cli_error_message(self, tmp_path):
        """log_cli_error should return a one-line message."""
        logger = AlmanacLogger(tmp_path, "cli")
        message = logger.log_cli_error(CategoryInUseError("Health", 2))
        logger.close()

        assert message == "❌ CategoryInUseError: Category 'Health' is used by 2 entries"


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_all_methods_are_noop(self):
        """All NullLogger methods should execute without error."""
        logger = NullLogger()

        logger.log_operation("test_op", {"key": "value"})
        logger.log_error(Exception("test"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message")
        logger.log_warning("warning message")

    def test_log_cli_error_formats_message(self):
        """NullLogger still formats CLI errors."""
        message = NullLogger().log_cli_error(ValueError("bad"))
        assert message == "❌ ValueError: bad"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        """safe_logger should return the provided logger."""
        mock_logger = MagicMock(spec=AlmanacLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_null_logger_when_none(self):
        """safe_logger should return NullLogger when given None."""
        assert isinstance(safe_logger(None), NullLogger)

    def test_null_logger_is_singleton(self):
        """safe_logger should return the same NullLogger instance."""
        assert safe_logger(None) is safe_logger(None)

    def test_forwards_calls(self):
        """Calls should reach a real logger unchanged."""
        mock_logger = MagicMock(spec=AlmanacLogger)
        error = ValueError("test")
        context = {"operation": "test_op"}

        safe_logger(mock_logger).log_error(error, context)
        mock_logger.log_error.assert_called_once_with(error, context)

        # Also works with None logger
        safe_logger(None).log_error(error, context)


class TestHandleCliError:
    """Tests for handle_cli_error function."""

    def test_exits_with_code(self):
        """handle_cli_error should print and exit."""
        ctx = click.Context(click.Command("test"), obj={})
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ValueError("bad"), "test_op", exit_code=2)
        assert exc_info.value.code == 2

    def test_logs_with_context(self):
        """The context logger should receive the operation and extra context."""
        mock_logger = MagicMock(spec=AlmanacLogger)
        mock_logger.log_cli_error.return_value = "❌ ValueError: bad"
        ctx = click.Context(click.Command("test"), obj={"logger": mock_logger})
        error = ValueError("bad")

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, error, "entry_add", {"kind": "victory"})

        mock_logger.log_cli_error.assert_called_once_with(
            error, {"operation": "entry_add", "kind": "victory"}, show_traceback=False
        )
