"""In-memory RecoveryStore.

Reference implementation of the RecoveryStore contract for tests and local
runs. Stores copies, so callers cannot mutate stored state without calling
``save``. A single ``save`` replaces the whole record, which makes it atomic
for the fields it writes.
"""

from dataclasses import replace

from recoverkit.domain.entities.user import User


class InMemoryRecoveryStore:
    """Dict-backed RecoveryStore.

    Attributes:
        save_count: Number of successful ``save`` calls.
    """

    def __init__(self, users: list[User] | None = None) -> None:
        """Initialize store, optionally seeded with users (not counted as writes)."""
        self._users: dict[str, User] = {}
        self.save_count = 0
        for user in users or []:
            self._users[user.primary_id] = replace(user)

    async def find_by_identifier(self, primary_id: str) -> User | None:
        """Find user by primary identifier."""
        user = self._users.get(primary_id)
        return replace(user) if user is not None else None

    async def find_by_fingerprint(self, fingerprint: str) -> User | None:
        """Find user holding the given recovery fingerprint."""
        if not fingerprint:
            return None
        for user in self._users.values():
            if user.recover_token == fingerprint:
                return replace(user)
        return None

    async def save(self, user: User) -> None:
        """Store a copy of user."""
        self._users[user.primary_id] = replace(user)
        self.save_count += 1
