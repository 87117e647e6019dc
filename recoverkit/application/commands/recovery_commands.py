"""Password recovery commands.

Commands are imperative (InitiateRecovery), immutable, and carry only the
data the flow needs. Secret fields are kept out of repr().
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class InitiateRecovery:
    """Start password recovery for an account.

    Attributes:
        primary_id: Account identifier as submitted by the user.
    """

    primary_id: str


@dataclass(frozen=True, kw_only=True)
class CompleteRecovery:
    """Redeem a recovery secret and set a new password.

    Attributes:
        token: Recovery secret from the emailed link.
        new_password: Replacement password (plaintext, hashed before storage).
        confirm_password: Repetition of new_password, checked when given.
    """

    token: str = field(repr=False)
    new_password: str = field(repr=False)
    confirm_password: str | None = field(default=None, repr=False)
