"""
Error Types and Handling Policies

Two policies are used across the backend:

- **Best-effort**: progress reads and saves log failures and hand back a
  benign fallback (``None`` or ``[]``). Wrap such functions with
  :func:`best_effort`.
- **Fail-fast**: seeding and role assignment let errors propagate so the
  caller (usually a CLI) can abort.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class AptiprepError(Exception):
    """Base class for all backend errors."""


class DocumentStoreError(AptiprepError):
    """Raised when the document store rejects or fails an operation."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when an update targets a document that does not exist."""


class SeedError(AptiprepError):
    """Raised when a seeding step cannot commit its batch."""

    def __init__(self, step: str, cause: BaseException):
        self.step = step
        self.cause = cause
        super().__init__(f"Seeding step '{step}' failed: {cause}")


class AttemptStateError(AptiprepError):
    """Raised when a test attempt is not in the state an operation requires."""


class AuthError(AptiprepError):
    """Raised when authentication fails or no session is present."""


class NotAuthorizedError(AuthError):
    """Raised when an authenticated user lacks the required role."""


def best_effort(fallback: T) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async functions that must never raise.

    Any exception is logged with its traceback and ``fallback`` is returned
    instead. Mutable fallbacks are copied per call.

    Args:
        fallback: Value returned when the wrapped call fails.
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception:
                logger.exception(f"{func.__name__} failed, returning fallback")
                if isinstance(fallback, (list, dict)):
                    return type(fallback)()
                return fallback
        return wrapper
    return decorator
