"""Users app package.

Accounts, authentication and host payout onboarding. A single custom user
model (``apps.users.models.CustomUser``) serves both guests and hosts and is
the project's AUTH_USER_MODEL.
"""
