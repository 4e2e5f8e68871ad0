"""Project-wide DRF exception handler.

Every error body leaving the API has the same shape: ``{"message": ...}``.
Domain exceptions are translated by the views themselves; this handler
only reshapes DRF's own errors (malformed payloads, unsupported media
types, unknown methods).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            return message if key == "detail" else f"{key}: {message}"
        return "Invalid request."
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else "Invalid request."
    return str(detail)


def message_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    """Render DRF exceptions as ``{"message": ...}``.

    Returns ``None`` for anything DRF does not know about, so unexpected
    errors still propagate to Django's 500 handling.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    message = _first_message(response.data)
    logger.warning(
        "api.request_rejected",
        status_code=response.status_code,
        error=exc.__class__.__name__,
    )
    response.data = {"message": message}
    return response
