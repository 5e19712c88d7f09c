import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Tags every log line of a request with one correlation id.

    The id comes from the ``X-Request-ID`` header, or a fresh UUID4, and
    is echoed back on the response.  Requests answered with 5xx are logged
    at error level so store failures surface next to their request.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )
        logger.info("request_started", query=request.META.get("QUERY_STRING", ""))
        start = time.monotonic()

        try:
            response = self.get_response(request)

            log = logger.error if response.status_code >= 500 else logger.info
            log(
                "request_finished",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
            response[REQUEST_ID_HEADER] = cid
            return response
        finally:
            structlog.contextvars.clear_contextvars()
