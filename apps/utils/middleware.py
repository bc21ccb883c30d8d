"""Custom middleware for the claimdesk project."""

from __future__ import annotations

from django.urls import Resolver404, resolve
from django.utils.deprecation import MiddlewareMixin


API_PREFIX = "/api/"


class NoAppendSlashForAPIMiddleware(MiddlewareMixin):
    """
    Let API URLs work with or without a trailing slash.

    ``/api/claims`` and ``/api/claims/`` reach the same view. Requests are
    rewritten in place rather than redirected, so PATCH and POST bodies
    survive. Non-API paths are left to ``CommonMiddleware``.
    """

    def process_request(self, request):
        path = request.path_info
        if not path.startswith(API_PREFIX) or _resolves(path):
            return None

        alternate = path.rstrip("/") if path.endswith("/") else path + "/"
        if _resolves(alternate):
            request.path_info = alternate
            request.path = request.path[: len(request.path) - len(path)] + alternate
        return None


def _resolves(path: str) -> bool:
    try:
        resolve(path)
    except Resolver404:
        return False
    return True
