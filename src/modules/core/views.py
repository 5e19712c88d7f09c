"""Liveness probe for the inventory API.

``GET /health`` answers 200 when the default database accepts queries and
503 otherwise.  While the store is up the payload also carries the size of
the active catalogue, which makes an empty or unseeded deployment visible.
"""

import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.categories.models import Category
from modules.products.models import Product

logger = structlog.get_logger(__name__)


def _probe_database() -> Dict[str, Any]:
    connection = connections["default"]
    started = time.monotonic()
    connection.ensure_connection()
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
    return {
        "estado": "up",
        "motor": connection.vendor,
        "latenciaMs": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    payload: Dict[str, Any] = {"fechaVerificacion": timezone.now().isoformat()}

    try:
        payload["baseDeDatos"] = _probe_database()
        payload["catalogo"] = {
            "categoriasActivas": Category.objects.alive().count(),
            "productosActivos": Product.objects.alive().count(),
        }
    except DatabaseError:
        logger.exception("health.database_unreachable")
        payload["baseDeDatos"] = {"estado": "down"}

    healthy = payload["baseDeDatos"]["estado"] == "up"
    payload["estado"] = "up" if healthy else "down"

    logger.info("health.checked", healthy=healthy)
    return JsonResponse(payload, status=200 if healthy else 503)
