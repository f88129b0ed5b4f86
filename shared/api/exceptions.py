"""Uniform error payloads for the REST API.

Every error response carries a top-level ``message`` with the first
human-readable problem. DRF validation errors keep their field breakdown
next to it; anything DRF does not know how to handle is logged and turned
into a generic 500.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class ServiceUnavailable(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service failed"
    default_code = "upstream_error"


def first_error_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for key in ("message", "detail", "non_field_errors"):
            if key in detail:
                return first_error_message(detail[key])
        for value in detail.values():
            return first_error_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=exc,
        )
        return Response({"message": SERVER_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(response.data, dict):
        if "message" not in response.data:
            response.data["message"] = first_error_message(response.data)
    else:
        response.data = {"message": first_error_message(response.data), "errors": response.data}
    return response
