"""Utility helpers used across apps."""

from .api_response import (  # noqa: F401
    api_error,
    api_success,
)
