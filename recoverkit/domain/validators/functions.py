"""Centralized validation functions.

Validators are pure functions. ``validate_*`` functions raise ValueError and
are used from Pydantic schemas; password policies return every violation so
the caller can report them per field.
"""

from collections.abc import Callable, Sequence

PasswordPolicy = Callable[[str], Sequence[str]]
"""A password policy returns the list of rules a password breaks (empty = ok)."""

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def strong_password_violations(v: str) -> list[str]:
    """Default password policy.

    Args:
        v: Candidate password.

    Returns:
        Violated rules, empty when the password is acceptable.

    Example:
        >>> strong_password_violations("NewPass1!")
        []
        >>> strong_password_violations("weak")[0]
        'Password must be at least 8 characters'
    """
    violations: list[str] = []
    if len(v) < 8:
        violations.append("Password must be at least 8 characters")
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        violations.append("Password must be at most 72 bytes")
    if not any(c.isupper() for c in v):
        violations.append("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        violations.append("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        violations.append("Password must contain digit")
    if not any(c in SPECIAL_CHARACTERS for c in v):
        violations.append("Password must contain special character")
    return violations


def validate_primary_id(v: str) -> str:
    """Validate an account identifier.

    Args:
        v: Identifier as submitted.

    Returns:
        Identifier with surrounding whitespace removed.

    Raises:
        ValueError: If the identifier is blank.
    """
    stripped = v.strip()
    if not stripped:
        raise ValueError("Identifier cannot be empty")
    return stripped
