"""Recovery domain errors.

Returned inside ``Failure`` (never raised). The three token errors share one
dataclass and are told apart by ``code``:

    - TOKEN_MALFORMED: empty secret or undecodable transport form
    - TOKEN_INVALID: no user holds the fingerprint (unknown or already used)
    - TOKEN_EXPIRED: the fingerprint exists but its expiry has passed

Callers facing the user must render MALFORMED and INVALID identically.
"""

from dataclasses import dataclass

from recoverkit.core.enums import ErrorCode
from recoverkit.core.errors import DomainError, ValidationError


@dataclass(frozen=True, slots=True, kw_only=True)
class RecoveryError(DomainError):
    """Recovery token verification failure."""

    @property
    def is_expired(self) -> bool:
        """True when the user should be told to restart recovery."""
        return self.code is ErrorCode.TOKEN_EXPIRED


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordPolicyError(ValidationError):
    """New password rejected by the password policy.

    Attributes:
        field: Offending field (``password`` or ``confirm_password``).
        violations: Every rule the password broke.
    """

    violations: tuple[str, ...] = ()


def malformed_token() -> RecoveryError:
    """Build the MalformedToken error."""
    return RecoveryError(
        code=ErrorCode.TOKEN_MALFORMED,
        message="Recovery token is malformed",
    )


def token_invalid() -> RecoveryError:
    """Build the TokenInvalid error."""
    return RecoveryError(
        code=ErrorCode.TOKEN_INVALID,
        message="Recovery token is invalid",
    )


def token_expired() -> RecoveryError:
    """Build the TokenExpired error."""
    return RecoveryError(
        code=ErrorCode.TOKEN_EXPIRED,
        message="Recovery token has expired",
    )
