"""Validators package exports."""

from recoverkit.domain.validators.functions import (
    PasswordPolicy,
    strong_password_violations,
    validate_primary_id,
)

__all__ = [
    "PasswordPolicy",
    "strong_password_violations",
    "validate_primary_id",
]
