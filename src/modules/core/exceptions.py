"""Business error taxonomy shared by every domain module.

Raised by the Service Layer when business rules are violated.  The API
layer translates them into HTTP responses in
``modules.core.exception_handler``:

- ``InvalidData``: caller-supplied data violates a rule (id bounds,
  required fields, numeric ranges).
- ``EntityNotFound``: the referenced id has no matching active record.
- ``EntityConflict``: uniqueness or dependency-blocking violation.
- ``InternalServiceError``: unexpected failure below the service, wrapped
  once by ``service_boundary`` with the original cause chained.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BusinessError(Exception):
    """Base class for every error the services report to the API layer."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidData(BusinessError):
    """Input shape or value is not acceptable."""


class EntityNotFound(BusinessError):
    """The referenced entity does not exist or is inactive."""


class EntityConflict(BusinessError):
    """A uniqueness or dependency rule blocks the operation."""


class InternalServiceError(BusinessError):
    """Unexpected failure (store fault, bug) wrapped at the service boundary."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def detail(self) -> str:
        return str(self.cause)


def service_boundary(message: str) -> Callable[[F], F]:
    """Wrap unexpected exceptions raised by a service method.

    ``BusinessError`` subclasses propagate untouched.  Anything else is
    re-raised as ``InternalServiceError`` whose message is ``message``
    formatted with the call's bound arguments, e.g.
    ``"Error al obtener la categoría con ID {id}"``.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except BusinessError:
                raise
            except Exception as exc:
                bound = signature.bind_partial(*args, **kwargs)
                text = message.format(**bound.arguments)
                logger.error(
                    "service.unexpected_error",
                    operation=func.__qualname__,
                    error=repr(exc),
                )
                raise InternalServiceError(text, cause=exc) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
