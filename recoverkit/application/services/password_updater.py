"""Password updater for recovery completion.

Flow:
1. Check the new password against the policy (and its confirmation)
2. Hash it (bcrypt, configurable cost)
3. Replace the hash and clear the recovery fields on the entity
4. Persist with a single save

Errors:
- PasswordPolicyError (Failure): user-correctable, carries the field name
- HashingFailure / PersistenceError (raised): fatal for the request
"""

from recoverkit.core.enums import ErrorCode
from recoverkit.core.result import Failure, Result, Success
from recoverkit.domain.entities.user import User
from recoverkit.domain.errors import PasswordPolicyError
from recoverkit.domain.protocols import PasswordHashingProtocol, RecoveryStore
from recoverkit.domain.validators import PasswordPolicy, strong_password_violations


class PasswordUpdater:
    """Validates, hashes and commits a new password."""

    def __init__(
        self,
        store: RecoveryStore,
        password_service: PasswordHashingProtocol,
        policy: PasswordPolicy = strong_password_violations,
    ) -> None:
        """Initialize updater.

        Args:
            store: Recovery store the updated user is saved to.
            password_service: Password hashing service.
            policy: Password policy returning violated rules.
        """
        self._store = store
        self._password_service = password_service
        self._policy = policy

    def check_policy(
        self, password: str, confirm_password: str | None = None
    ) -> Result[None, PasswordPolicyError]:
        """Check a candidate password without touching storage."""
        violations = tuple(self._policy(password))
        if violations:
            return Failure(
                error=PasswordPolicyError(
                    code=ErrorCode.PASSWORD_TOO_WEAK,
                    message=violations[0],
                    field="password",
                    violations=violations,
                )
            )
        if confirm_password is not None and confirm_password != password:
            return Failure(
                error=PasswordPolicyError(
                    code=ErrorCode.PASSWORD_MISMATCH,
                    message="Passwords do not match",
                    field="confirm_password",
                    violations=("Passwords do not match",),
                )
            )
        return Success(value=None)

    async def update(
        self,
        user: User,
        new_password: str,
        confirm_password: str | None = None,
    ) -> Result[User, PasswordPolicyError]:
        """Replace the user's password and clear the recovery token.

        Args:
            user: Verified user.
            new_password: Replacement password.
            confirm_password: Optional confirmation.

        Returns:
            Success(user) after the single save, Failure on policy violation
            (nothing is written in that case).

        Raises:
            HashingFailure: If hashing fails.
            PersistenceError: If the save fails.
        """
        policy_result = self.check_policy(new_password, confirm_password)
        if isinstance(policy_result, Failure):
            return policy_result

        password_hash = self._password_service.hash_password(new_password)
        user.complete_recovery(password_hash)
        await self._store.save(user)

        return Success(value=user)
