"""JSON response helpers shared by the API views."""

from __future__ import annotations

from typing import Any, Optional

from rest_framework import status
from rest_framework.response import Response


def api_success(data: Any, message: Optional[str] = None, status_code: int = status.HTTP_200_OK) -> Response:
    """Return ``data`` as the response body.

    When ``message`` is given and ``data`` is a mapping, the message is added
    under the ``message`` key.
    """
    if message is not None:
        body = {"message": message}
        if data:
            body.update(data)
        data = body
    return Response(data, status=status_code)


def api_error(
    message: str,
    data: Optional[dict[str, Any]] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    """Return an error body of the form ``{"error": message, **data}``."""
    body: dict[str, Any] = {"error": message}
    if data:
        body.update(data)
    return Response(body, status=status_code)
