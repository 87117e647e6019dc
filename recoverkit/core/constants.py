"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For environment-specific
settings use ``recoverkit.core.config`` instead.

Example:
    >>> from recoverkit.core.constants import TOKEN_BYTES
    >>> raw = secrets.token_bytes(TOKEN_BYTES)
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of random bytes in a recovery secret (32 bytes = 256 bits)."""

FINGERPRINT_LOG_PREFIX_LENGTH: int = 8
"""How many fingerprint characters may appear in logs and events."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Request Field Names
# =============================================================================

FORM_VALUE_TOKEN: str = "token"
"""Query/body field carrying the recovery secret."""

CONFIRM_PREFIX: str = "confirm_"
"""Prefix for confirmation fields (``confirm_primary_id``, ``confirm_password``)."""

RECOVER_COMPLETE_PATH: str = "recover/complete"
"""Path (relative to the mount path) of the recovery completion endpoint."""


# =============================================================================
# User-Facing Messages
# =============================================================================

RECOVER_INITIATE_SUCCESS_MESSAGE: str = (
    "An email has been sent with further instructions on how to reset your password"
)
RECOVER_TOKEN_EXPIRED_MESSAGE: str = (
    "Account recovery request has expired. Please try again."
)
RECOVER_FAILED_MESSAGE: str = (
    "Account recovery has failed. Please contact tech support."
)
RECOVER_COMPLETE_SUCCESS_MESSAGE: str = "Your password has been reset."

PASSWORD_RESET_SUBJECT: str = "Password Reset"
"""Subject line appended to the configured subject prefix."""


# =============================================================================
# Session
# =============================================================================

SESSION_KEY: str = "uid"
"""Session entry holding the primary identifier of the signed-in user."""
