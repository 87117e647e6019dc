"""Domain errors package.

Usage:
    from recoverkit.domain.errors import RecoveryError, PasswordPolicyError
"""

from recoverkit.domain.errors.recovery_error import (
    PasswordPolicyError,
    RecoveryError,
    malformed_token,
    token_expired,
    token_invalid,
)

__all__ = [
    "RecoveryError",
    "PasswordPolicyError",
    "malformed_token",
    "token_invalid",
    "token_expired",
]
