"""Optional call tracing for buffer and ACL methods.

:func:`trace_sync` wraps a synchronous callable.  While tracing is disabled,
which is the default, the wrapper forwards the call and does nothing else.
When enabled, entry, exit and elapsed time are logged at ``DEBUG`` on the
``pagebuffer.trace`` logger and exceptions are logged before being re-raised
unchanged.
"""

from __future__ import annotations

import functools
from time import perf_counter
from typing import Any, Callable, TypeVar

from .logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger("trace")

_enabled = False


def set_tracing(enabled: bool) -> None:
    """Enable or disable tracing process-wide."""

    global _enabled
    _enabled = bool(enabled)


def tracing_enabled() -> bool:
    return _enabled


def trace_sync(name: str) -> Callable[[F], F]:
    """Return a decorator tracing calls under ``name``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _enabled:
                return func(*args, **kwargs)
            start = perf_counter()
            logger.debug("enter %s", name)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.debug(
                    "error %s after %.3f ms: %s: %s",
                    name,
                    (perf_counter() - start) * 1000.0,
                    type(exc).__name__,
                    exc,
                )
                raise
            logger.debug("exit %s in %.3f ms", name, (perf_counter() - start) * 1000.0)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["set_tracing", "trace_sync", "tracing_enabled"]
