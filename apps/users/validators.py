"""Password validators enforcing the marketplace password policy."""

from __future__ import annotations

import re

from django.core.exceptions import ValidationError  # type: ignore
from django.utils.translation import gettext as _  # type: ignore

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


class NumberValidator:
    """Requires at least one digit."""

    def validate(self, password: str, user=None) -> None:
        if not re.search(r"[0-9]", password):
            raise ValidationError(
                _("Password must contain at least one number"),
                code="password_no_number",
            )

    def get_help_text(self) -> str:
        return _("Your password must contain at least one number.")


class SpecialCharacterValidator:
    """Requires at least one character from ``SPECIAL_CHARACTERS``."""

    def __init__(self, characters: str = SPECIAL_CHARACTERS) -> None:
        self.characters = characters

    def validate(self, password: str, user=None) -> None:
        if not any(char in self.characters for char in password):
            raise ValidationError(
                _("Password must contain at least one special character"),
                code="password_no_special",
            )

    def get_help_text(self) -> str:
        return _("Your password must contain at least one special character.")
