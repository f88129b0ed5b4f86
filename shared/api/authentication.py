"""JWT authentication that also accepts the token from the auth cookie."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken  # type: ignore

logger = logging.getLogger(__name__)


class CookieJWTAuthentication(JWTAuthentication):
    """Reads the access token from the `jwt` cookie, then from the
    `Authorization: Bearer <token>` header.

    A stale cookie is ignored so public endpoints stay reachable; an invalid
    header token is still rejected.
    """

    def authenticate(self, request):  # type: ignore
        raw_token = request.COOKIES.get(settings.JWT_AUTH_COOKIE) or None
        if raw_token is not None:
            try:
                validated_token = self.get_validated_token(raw_token)
            except InvalidToken:
                logger.info("Ignoring invalid auth cookie")
            else:
                return self.get_user(validated_token), validated_token

        header = self.get_header(request)
        if header is None:
            return None
        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token


def set_auth_cookie(response, token: str) -> None:
    response.set_cookie(
        settings.JWT_AUTH_COOKIE,
        token,
        max_age=settings.JWT_EXPIRES_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
        samesite=settings.JWT_COOKIE_SAMESITE,
    )


def clear_auth_cookie(response) -> None:
    response.delete_cookie(settings.JWT_AUTH_COOKIE, samesite=settings.JWT_COOKIE_SAMESITE)
