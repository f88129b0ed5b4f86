"""Service banner and health check endpoints."""

from __future__ import annotations

import logging

from django.db import connection  # type: ignore
from django.db.utils import OperationalError  # type: ignore
from rest_framework.decorators import api_view, permission_classes  # type: ignore
from rest_framework.permissions import AllowAny  # type: ignore
from rest_framework.response import Response  # type: ignore

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([AllowAny])
def service_root(request):
    return Response({"message": "TravelTrove Backend API", "status": "running"})


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    """Reports whether the API is up and the database reachable."""
    try:
        connection.ensure_connection()
        database_connected = True
    except OperationalError as exc:
        logger.warning(f"Health check could not reach the database: {exc}")
        database_connected = False
    return Response(
        {
            "status": "ok",
            "message": "Backend is running",
            "database_connected": database_connected,
        }
    )
