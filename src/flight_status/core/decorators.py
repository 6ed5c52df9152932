"""Cross-cutting decorators for logging connector and client calls."""

import asyncio
from collections.abc import Callable
import functools
import logging
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


def log_execution(
    level: int = logging.INFO,
    *,
    include_args: bool = False,
) -> Callable[[F], F]:
    """Decorator to log entry and completion of a sync or async function.

    Failures are logged at ERROR with the traceback and re-raised unchanged.

    Args:
        level: Logging level for the entry and completion records
        include_args: Whether to log function arguments

    Returns:
        Decorated function with logging capabilities
    """

    def decorator(func: F) -> F:
        func_name = f"{func.__module__}.{func.__qualname__}"

        def _log_entry(args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
            if include_args:
                logger.log(
                    level,
                    "Executing %s with args=%s, kwargs=%s",
                    func_name,
                    args,
                    kwargs,
                )
            else:
                logger.log(level, "Executing %s", func_name)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            _log_entry(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s", func_name)
                raise
            logger.log(level, "Completed %s", func_name)
            return result

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            _log_entry(args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s", func_name)
                raise
            logger.log(level, "Completed %s", func_name)
            return result

        if asyncio.iscoroutinefunction(func):
            return cast("F", async_wrapper)
        return cast("F", sync_wrapper)

    return decorator
