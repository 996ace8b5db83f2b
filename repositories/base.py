"""
Shared plumbing for the async MongoDB repositories.

Repositories wrap a single pymongo ``AsyncCollection``. Driver failures are
surfaced as DependencyError so the error handler answers 500 without leaking
driver details; duplicate-key violations are left to the calling method,
which knows which uniqueness rule was broken.
"""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

from pymongo.errors import DuplicateKeyError, PyMongoError

from errors import DependencyError
from shared.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def store_call(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Translate driver errors raised by *fn* into DependencyError."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await fn(*args, **kwargs)
        except DuplicateKeyError:
            raise
        except PyMongoError as e:
            log.error(
                "store_operation_failed",
                operation=fn.__qualname__,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DependencyError("Document store unavailable") from e

    return wrapper
