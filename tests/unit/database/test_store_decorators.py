"""Tests for store operation and persistence error decorators."""
import pytest
from unittest.mock import MagicMock

import yaml
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from almanac.core.exceptions import DatabaseError, PersistenceError
from almanac.core.logging_manager import AlmanacLogger
from almanac.database.decorators import handle_persistence_errors, log_store_operation


class Worker:
    """Minimal object exposing a logger, like the managers do."""

    def __init__(self, logger=None):
        self.logger = logger

    @log_store_operation("double")
    def double(self, value):
        return value * 2

    @log_store_operation("explode")
    def explode(self):
        raise ValueError("invalid value")


class TestLogStoreOperation:
    """Tests for log_store_operation decorator."""

    def test_successful_operation(self):
        """Completion should be logged with success=True."""
        mock_logger = MagicMock(spec=AlmanacLogger)

        assert Worker(mock_logger).double(2) == 4

        mock_logger.log_debug.assert_called_once()
        assert mock_logger.log_debug.call_args[0][0] == "Starting double"
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "double_completed"
        assert call_args[0][1]["success"] is True

    def test_without_logger(self):
        """Operations should work without a logger."""
        assert Worker().double(3) == 6

    def test_errors_logged_and_propagated(self):
        mock_logger = MagicMock(spec=AlmanacLogger)

        with pytest.raises(ValueError):
            Worker(mock_logger).explode()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "explode"
        mock_logger.log_operation.assert_not_called()

    def test_preserves_name(self):
        assert Worker.double.__name__ == "double"


class TestHandlePersistenceErrors:
    """Tests for handle_persistence_errors decorator."""

    @pytest.mark.parametrize(
        "error,message",
        [
            (IntegrityError("statement", {}, Exception("duplicate")), "Data integrity violation"),
            (SQLAlchemyError("connection failed"), "Database operation failed"),
            (yaml.YAMLError("bad document"), "Invalid journal document"),
            (PermissionError("denied"), "Storage unavailable"),
        ],
    )
    def test_converts_backend_errors(self, error, message):
        @handle_persistence_errors
        def failing():
            raise error

        with pytest.raises(PersistenceError) as exc_info:
            failing()

        assert message in str(exc_info.value)
        assert isinstance(exc_info.value, DatabaseError)

    def test_other_exceptions_propagate(self):
        @handle_persistence_errors
        def failing():
            raise KeyError("x")

        with pytest.raises(KeyError):
            failing()

    def test_passes_result_through(self):
        @handle_persistence_errors
        def succeed():
            return 42

        assert succeed() == 42
