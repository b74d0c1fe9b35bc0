#!/usr/bin/env python3
"""
decorators.py
--------------------
Decorators shared by the journal managers, the store facade, analytics and
the persistence backends.

- log_store_operation: debug/operation/error records around a method call
- handle_persistence_errors: backend failures surface as PersistenceError
"""
import time
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import yaml

from almanac.core.exceptions import PersistenceError


def _logger_of(instance: Any) -> Optional[Any]:
    return getattr(instance, "logger", None) or None


def log_store_operation(operation_name: str):
    """
    Decorator to log a method call with timing and context.

    The instance must expose a `logger` attribute (AlmanacLogger or None);
    nothing is logged when it is None. Exceptions are logged and re-raised
    unchanged.

    Args:
        operation_name: Name recorded for the operation, e.g. "add_entry"

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = _logger_of(self)
            started = time.perf_counter()
            context: Dict[str, Any] = {
                "operation_id": f"{operation_name}_{datetime.now():%Y%m%d_%H%M%S_%f}",
                "component": type(self).__name__,
            }

            if logger:
                logger.log_debug(
                    f"Starting {operation_name}",
                    {**context, "args_count": len(args), "kwargs_keys": sorted(kwargs)},
                )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                if logger:
                    logger.log_error(
                        e,
                        {
                            "operation": operation_name,
                            **context,
                            "duration_seconds": time.perf_counter() - started,
                        },
                    )
                raise

            if logger:
                logger.log_operation(
                    f"{operation_name}_completed",
                    {
                        **context,
                        "duration_seconds": time.perf_counter() - started,
                        "success": True,
                    },
                )
            return result

        return wrapper

    return decorator


def handle_persistence_errors(function: Callable) -> Callable:
    """
    Decorator converting backend failures into PersistenceError.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise PersistenceError(f"Data integrity violation: {e}")
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database operation failed: {e}")
        except yaml.YAMLError as e:
            raise PersistenceError(f"Invalid journal document: {e}")
        except OSError as e:
            raise PersistenceError(f"Storage unavailable: {e}")

    return wrapper
