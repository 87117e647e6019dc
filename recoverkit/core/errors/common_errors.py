"""Common error classes used across layers.

Error Types:
- ValidationError: Input validation failures

Usage:
    from recoverkit.core.errors import ValidationError
    from recoverkit.core.enums import ErrorCode
    from recoverkit.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.PASSWORD_TOO_WEAK,
        message="Password must be at least 8 characters",
        field="password",
    ))
"""

from dataclasses import dataclass

from recoverkit.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None
