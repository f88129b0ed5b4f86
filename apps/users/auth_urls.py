"""URL routing for authentication endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework_simplejwt.views import TokenRefreshView  # type: ignore

from .auth_views import (
    LoginView,
    LogoutView,
    MeView,
    OnboardingWebhookView,
    PasswordChangeView,
    PaymentAccountView,
    PaymentOnboardingView,
    RegisterView,
    VerifyContactView,
)

app_name = "auth"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("me/password/", PasswordChangeView.as_view(), name="password-change"),
    path("verify/", VerifyContactView.as_view(), name="verify"),
    path("payment-account/", PaymentAccountView.as_view(), name="payment-account"),
    path("payment-onboarding/", PaymentOnboardingView.as_view(), name="payment-onboarding"),
    path(
        "webhooks/payment-onboarding/",
        OnboardingWebhookView.as_view(),
        name="payment-onboarding-webhook",
    ),
]
