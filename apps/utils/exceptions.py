"""Exception handler for the REST API."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.views import exception_handler

from .api_response import api_error


logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Wrap DRF's handler so every error body carries an ``error`` key.

    Exceptions DRF does not know about are logged with their traceback and
    turned into a 500 response instead of reaching the WSGI server.
    """
    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data
        if isinstance(detail, dict) and "detail" in detail and len(detail) == 1:
            response.data = {"error": str(detail["detail"])}
        else:
            response.data = {"error": "Invalid request", "details": detail}
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "unknown view")
    return api_error(
        "Internal server error",
        {"details": str(exc)},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
