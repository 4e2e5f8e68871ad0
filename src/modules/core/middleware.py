import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID and log its outcome.

    The ID comes from the ``X-Request-ID`` header or is a fresh UUID4.
    It is bound into structlog's contextvars, so catalog and media-store
    log lines emitted while serving the request carry it, and it is
    echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        logger.info("request_started")
        start = time.monotonic()

        response = self.get_response(request)

        logger.info(
            "request_finished",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        response["X-Request-ID"] = cid
        return response
