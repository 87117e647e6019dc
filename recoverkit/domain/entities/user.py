"""User domain entity for password recovery.

Pure business logic, no framework dependencies.

Recovery State:
    - recover_token: Fingerprint of the outstanding recovery secret
    - recover_token_expiry: When that fingerprint stops being redeemable
    - Both are set together and cleared together (see begin_recovery and
      complete_recovery); nothing else mutates them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass
class User:
    """User domain entity with recovery business rules.

    Attributes:
        primary_id: Stable account identifier (username or user id).
        email: Contact address recovery links are sent to.
        password_hash: Bcrypt hashed password (never plaintext).
        recover_token: Fingerprint of the outstanding recovery secret.
        recover_token_expiry: Expiry paired with recover_token.
        id: Surrogate storage key.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(primary_id="alice", email="alice@example.com",
        ...             password_hash="$2b$12$...")
        >>> user.has_pending_recovery()
        False
        >>> user.begin_recovery("fp", datetime.now(UTC) + timedelta(hours=1))
        >>> user.has_pending_recovery()
        True
    """

    primary_id: str
    email: str
    password_hash: str
    recover_token: str | None = None
    recover_token_expiry: datetime | None = None
    id: UUID = field(default_factory=uuid7)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def has_pending_recovery(self) -> bool:
        """Check whether a recovery token is outstanding."""
        return bool(self.recover_token) and self.recover_token_expiry is not None

    def begin_recovery(self, fingerprint: str, expires_at: datetime) -> None:
        """Record a newly issued recovery fingerprint.

        Overwrites any outstanding fingerprint, which invalidates the secret
        it was derived from.

        Args:
            fingerprint: Stored digest of the issued secret.
            expires_at: Moment the token stops being redeemable.

        Raises:
            ValueError: If fingerprint is empty.
        """
        if not fingerprint:
            raise ValueError("Recovery fingerprint cannot be empty")
        self.recover_token = fingerprint
        self.recover_token_expiry = expires_at
        self.updated_at = datetime.now(UTC)

    def is_recovery_expired(self, now: datetime) -> bool:
        """Check whether the outstanding token is expired at ``now``.

        Expiry is a hard boundary: a token whose expiry equals ``now`` is
        already expired. A user without a pending recovery counts as expired.
        """
        if not self.has_pending_recovery():
            return True
        assert self.recover_token_expiry is not None
        return self.recover_token_expiry <= now

    def complete_recovery(self, password_hash: str) -> None:
        """Replace the password and clear the recovery fields together.

        Args:
            password_hash: Hash of the new password.
        """
        self.password_hash = password_hash
        self.recover_token = None
        self.recover_token_expiry = None
        self.updated_at = datetime.now(UTC)
