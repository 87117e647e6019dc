"""RecoveryStore protocol (port) for domain layer.

Persists and retrieves users by primary identifier or by recovery
fingerprint.

Contract:
    - Lookups return None when nothing matches; they never raise for
      "not found".
    - ``save`` is atomic for every field it writes in one call. The flow
      relies on this for (fingerprint, expiry) and for
      (password_hash, cleared fingerprint, cleared expiry).
    - Storage failures raise PersistenceError.

Implementations:
    - InMemoryRecoveryStore: recoverkit/infrastructure/persistence/in_memory_store.py
    - SQLAlchemyRecoveryStore: recoverkit/infrastructure/persistence/repositories/user_repository.py
"""

from typing import Protocol

from recoverkit.domain.entities.user import User


class RecoveryStore(Protocol):
    """Protocol for user persistence needed by password recovery."""

    async def find_by_identifier(self, primary_id: str) -> User | None:
        """Find user by primary identifier.

        Args:
            primary_id: Account identifier.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_fingerprint(self, fingerprint: str) -> User | None:
        """Find user holding an outstanding recovery fingerprint.

        Does NOT check expiration; the caller does.

        Args:
            fingerprint: Stored digest of a recovery secret.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def save(self, user: User) -> None:
        """Persist user atomically.

        Raises:
            PersistenceError: If the write fails.
        """
        ...
