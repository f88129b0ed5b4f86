"""Views for authentication flows (register, login, profile, verification, payouts)."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import PermissionDenied  # type: ignore
from rest_framework.permissions import AllowAny, IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from apps.notifications.services import send_verification_codes
from apps.payments import razorpay_service
from shared.api.authentication import clear_auth_cookie, set_auth_cookie

from .auth_serializers import (
    LoginSerializer,
    OnboardingWebhookSerializer,
    PasswordChangeSerializer,
    PaymentAccountSerializer,
    PaymentOnboardingSerializer,
    RegisterSerializer,
    VerifyContactSerializer,
)
from .serializers import ProfileUpdateSerializer, UserSerializer

logger = logging.getLogger(__name__)


def _auth_response(user, *, status_code: int = status.HTTP_200_OK, is_host: bool | None = None) -> Response:
    """Token envelope shared by register and login; also sets the auth cookie."""
    refresh = RefreshToken.for_user(user)
    access = str(refresh.access_token)
    user_data = UserSerializer(user).data
    if is_host is not None:
        user_data["is_host"] = is_host
    response = Response(
        {"status": "success", "token": access, "refresh": str(refresh), "user": user_data},
        status=status_code,
    )
    set_auth_cookie(response, access)
    return response


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User registered: {user.pk} ({user.email})")

        user.issue_verification_codes(ttl_hours=settings.VERIFICATION_CODE_TTL_HOURS)
        send_verification_codes(user)

        return _auth_response(user, status_code=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        role = serializer.validated_data.get("role")
        is_host = (role == "host") if role else None
        return _auth_response(user, is_host=is_host)


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        response = Response({"status": "success", "message": "Logged out"})
        clear_auth_cookie(response)
        return response


class MeView(APIView):
    """Current user's profile: read, update or delete the account."""

    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response({"status": "success", "user": UserSerializer(request.user).data})

    def patch(self, request):  # type: ignore
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"status": "success", "user": UserSerializer(user).data})

    def delete(self, request):  # type: ignore
        user_id = request.user.pk
        request.user.delete()
        logger.info(f"User account deleted: {user_id}")
        response = Response({"status": "success", "message": "Account deleted"})
        clear_auth_cookie(response)
        return response


class PasswordChangeView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request):  # type: ignore
        serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"status": "success", "message": "Password updated"})


class VerifyContactView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = VerifyContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"status": "success", "user": UserSerializer(user).data})


class PaymentAccountView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = PaymentAccountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request.user.link_payment_account(serializer.validated_data["payment_account_id"])
        logger.info(f"Payment account linked for user {request.user.pk}")
        return Response({"status": "success", "user": UserSerializer(request.user).data})


class PaymentOnboardingView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = PaymentOnboardingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        onboarding_url = razorpay_service.create_onboarding_link(request.user.pk)
        return Response({"status": "success", "onboarding_url": onboarding_url})


class OnboardingWebhookView(APIView):
    """Called by the gateway once a host finishes linked-account onboarding."""

    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        signature = request.headers.get("X-Razorpay-Signature", "")
        if not razorpay_service.verify_webhook_signature(request.body, signature):
            logger.warning("Rejected onboarding webhook with an invalid signature")
            raise PermissionDenied("Invalid signature")

        serializer = OnboardingWebhookSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        user.link_payment_account(serializer.validated_data["payment_account_id"])
        logger.info(f"Onboarding completed for user {user.pk}")
        return Response({"status": "success"})
