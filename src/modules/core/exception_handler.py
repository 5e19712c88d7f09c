"""DRF exception handler producing the API's error envelope.

Every error response carries a human-readable ``mensaje``.  Internal
failures additionally carry ``detalle`` with the underlying cause, and
schema errors carry ``errores`` with one entry per offending field.

Status mapping for business errors is chosen per view action: actions
listed in the view's ``not_found_actions`` (GET by id, category with
products) answer 404, every other action answers 400.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import BusinessError, InternalServiceError

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"
INVALID_PAYLOAD_MESSAGE = "Los datos enviados no son válidos"


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    view = context.get("view")
    action = getattr(view, "action", None)

    if isinstance(exc, InternalServiceError):
        logger.error(
            "api.internal_error",
            action=action,
            error=exc.message,
            cause=repr(exc.cause),
        )
        return Response(
            {"mensaje": exc.message, "detalle": exc.detail},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, BusinessError):
        not_found_actions = getattr(view, "not_found_actions", frozenset())
        status_code = (
            status.HTTP_404_NOT_FOUND
            if action in not_found_actions
            else status.HTTP_400_BAD_REQUEST
        )
        logger.info(
            "api.business_error",
            action=action,
            error_type=type(exc).__name__,
            status_code=status_code,
        )
        return Response({"mensaje": exc.message}, status=status_code)

    if isinstance(exc, PydanticValidationError):
        errors = [
            {
                "campo": ".".join(str(part) for part in error["loc"]),
                "detalle": error["msg"],
            }
            for error in exc.errors(
                include_url=False, include_context=False, include_input=False
            )
        ]
        return Response(
            {"mensaje": INVALID_PAYLOAD_MESSAGE, "errores": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {"mensaje": str(detail) if detail else INVALID_PAYLOAD_MESSAGE}
        return response

    logger.exception("api.unhandled_error", action=action)
    return Response(
        {"mensaje": INTERNAL_ERROR_MESSAGE, "detalle": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
