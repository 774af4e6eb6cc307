"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
import time
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: F) -> F:
    """Decorator to log how long an S3 call took.

    The object key, when passed as ``object_key``, is included in the log line.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that logs execution time and re-raises failures
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        target = kwargs.get("object_key") or kwargs.get("prefix", "")
        try:
            result = func(*args, **kwargs)
            duration = time.perf_counter() - start_time
            logger.debug(f"{func.__name__}({target!r}) completed in {duration:.3f}s")
            return result
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.warning(f"{func.__name__}({target!r}) failed after {duration:.3f}s: {str(e)}")
            raise
    return cast(F, wrapper)
