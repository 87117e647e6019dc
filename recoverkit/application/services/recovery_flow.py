"""Password recovery flow.

States:
    NoRecovery -> Issued -> {Verified -> Consumed} | Expired | Invalid

Initiate:
1. Look up user by primary identifier
2. If not found: publish PasswordRecoveryRequestIgnored, return Success
   (identical to a real issuance, no token, no store write)
3. Generate secret + fingerprint
4. Persist fingerprint and expiry (overwrites any outstanding token)
5. Publish PasswordRecoveryRequested
6. Deliver the reset link, inline or through the task runner
7. Return Success

Verify:
1. Decode secret and recompute fingerprint (MalformedToken on failure)
2. Look up user by fingerprint (TokenInvalid if absent)
3. Reject when expiry <= now (TokenExpired)

Complete:
1. Verify (failures propagate unchanged)
2. PasswordUpdater: policy, hash, single save that also clears the token
3. Publish PasswordResetCompleted (after-password-reset hook)
4. Return Success(RecoveryCompleted) - signals a new session for primary_id

Architecture:
- Application layer ONLY imports from domain and core
- Collaborators are injected; there is no global registry
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

from recoverkit.application.commands.recovery_commands import (
    CompleteRecovery,
    InitiateRecovery,
)
from recoverkit.application.services.password_updater import PasswordUpdater
from recoverkit.core.constants import (
    FINGERPRINT_LOG_PREFIX_LENGTH,
    FORM_VALUE_TOKEN,
    RECOVER_COMPLETE_PATH,
    RECOVER_COMPLETE_SUCCESS_MESSAGE,
    RECOVER_INITIATE_SUCCESS_MESSAGE,
)
from recoverkit.core.enums import ErrorCode
from recoverkit.core.result import Failure, Result, Success
from recoverkit.domain.entities.user import User
from recoverkit.domain.errors import (
    PasswordPolicyError,
    RecoveryError,
    malformed_token,
    token_expired,
    token_invalid,
)
from recoverkit.domain.events.recovery_events import (
    PasswordRecoveryRequested,
    PasswordRecoveryRequestIgnored,
    PasswordRecoveryVerificationFailed,
    PasswordResetCompleted,
    RecoveryEmailDeliveryFailed,
)
from recoverkit.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    NotifierProtocol,
    RecoveryStore,
    RecoveryTokenGeneratorProtocol,
    TaskRunnerProtocol,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class RecoveryInitiated:
    """Outcome of a recovery request.

    Identical whether or not the account exists.
    """

    message: str = RECOVER_INITIATE_SUCCESS_MESSAGE


@dataclass(frozen=True)
class RecoveryCompleted:
    """Outcome of a completed recovery.

    Attributes:
        primary_id: Account a new authenticated session must be started for.
    """

    primary_id: str
    message: str = RECOVER_COMPLETE_SUCCESS_MESSAGE


class RecoveryFlow:
    """Issues, verifies and consumes password recovery tokens.

    Concurrent initiations for the same user race on the store; the last
    save wins and only its secret stays valid.
    """

    def __init__(
        self,
        store: RecoveryStore,
        token_generator: RecoveryTokenGeneratorProtocol,
        notifier: NotifierProtocol,
        password_updater: PasswordUpdater,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        root_url: str,
        mount_path: str,
        token_duration: timedelta,
        email_subject_prefix: str = "",
        task_runner: TaskRunnerProtocol | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize recovery flow with dependencies.

        Args:
            store: User persistence.
            token_generator: Mints and fingerprints recovery secrets.
            notifier: Delivers the reset link.
            password_updater: Policy, hashing and commit of new passwords.
            event_bus: Domain event publishing.
            logger: Structured logger.
            root_url: Public root URL (no trailing slash).
            mount_path: Path the recovery routes are mounted under.
            token_duration: Lifetime of an issued token.
            email_subject_prefix: Prefix for the reset email subject.
            task_runner: Background executor for link delivery. When None the
                link is sent inline before initiate() returns.
            clock: Source of "now" (UTC).
        """
        if token_duration <= timedelta(0):
            msg = "token_duration must be positive"
            raise ValueError(msg)

        self._store = store
        self._token_generator = token_generator
        self._notifier = notifier
        self._password_updater = password_updater
        self._event_bus = event_bus
        self._logger = logger
        self._root_url = root_url.rstrip("/")
        self._mount_path = mount_path
        self._token_duration = token_duration
        self._email_subject_prefix = email_subject_prefix
        self._task_runner = task_runner
        self._clock = clock

    # =========================================================================
    # Initiate
    # =========================================================================

    async def initiate(
        self, cmd: InitiateRecovery
    ) -> Result[RecoveryInitiated, RecoveryError]:
        """Issue a recovery token for cmd.primary_id.

        Returns:
            Always Success(RecoveryInitiated()), so callers cannot tell
            existing accounts from unknown ones.

        Raises:
            EntropyFailure: If the random source fails.
            PersistenceError: If the store fails.
        """
        user = await self._store.find_by_identifier(cmd.primary_id)

        if user is None:
            await self._event_bus.publish(
                PasswordRecoveryRequestIgnored(
                    primary_id=cmd.primary_id,
                    reason=ErrorCode.USER_NOT_FOUND.value,
                )
            )
            return Success(value=RecoveryInitiated())

        secret, fingerprint = self._token_generator.generate()
        user.begin_recovery(fingerprint, self._clock() + self._token_duration)
        await self._store.save(user)

        await self._event_bus.publish(
            PasswordRecoveryRequested(
                user_id=user.id,
                primary_id=user.primary_id,
                fingerprint_prefix=fingerprint[:FINGERPRINT_LOG_PREFIX_LENGTH],
            )
        )

        reset_url = self.build_recovery_url(secret)
        if self._task_runner is None:
            await self._send_recovery_email(user, reset_url)
        else:
            self._task_runner.submit(
                self._send_recovery_email(user, reset_url),
                name=f"recovery_email:{user.id}",
            )

        return Success(value=RecoveryInitiated())

    def build_recovery_url(self, secret: str) -> str:
        """Build ``<root>/<mount>/recover/complete?token=<secret>``."""
        path = posixpath.join(self._mount_path or "/", RECOVER_COMPLETE_PATH)
        query = urlencode({FORM_VALUE_TOKEN: secret})
        return f"{self._root_url}{path}?{query}"

    async def _send_recovery_email(self, user: User, reset_url: str) -> None:
        """Deliver the reset link; failures are reported, never raised.

        The token is already committed and stays redeemable, so a delivery
        failure does not roll anything back.
        """
        try:
            await self._notifier.send(
                recipient=user.email,
                subject_prefix=self._email_subject_prefix,
                reset_url=reset_url,
            )
        except Exception as exc:  # noqa: BLE001 - notifier is an external adapter
            self._logger.error(
                "recovery_email_failed",
                error=exc,
                user_id=str(user.id),
            )
            await self._event_bus.publish(
                RecoveryEmailDeliveryFailed(
                    user_id=user.id,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
            )

    # =========================================================================
    # Verify
    # =========================================================================

    async def verify(self, token: str) -> Result[User, RecoveryError]:
        """Check a recovery secret.

        Args:
            token: URL-safe encoded secret from the reset link.

        Returns:
            Success(user) while the token is outstanding and unexpired.
            Failure(RecoveryError) with TOKEN_MALFORMED, TOKEN_INVALID or
            TOKEN_EXPIRED otherwise.
        """
        try:
            fingerprint = self._token_generator.fingerprint(token)
        except ValueError:
            return await self._reject(malformed_token())

        user = await self._store.find_by_fingerprint(fingerprint)
        if user is None:
            return await self._reject(token_invalid())

        if user.is_recovery_expired(self._clock()):
            return await self._reject(token_expired())

        return Success(value=user)

    async def _reject(self, error: RecoveryError) -> Failure[RecoveryError]:
        await self._event_bus.publish(
            PasswordRecoveryVerificationFailed(reason=error.code.value)
        )
        return Failure(error=error)

    # =========================================================================
    # Complete
    # =========================================================================

    async def complete(
        self, cmd: CompleteRecovery
    ) -> Result[RecoveryCompleted, RecoveryError | PasswordPolicyError]:
        """Redeem a recovery secret and replace the password.

        Returns:
            Success(RecoveryCompleted) once the new hash is stored and the
            token cleared. Verification failures propagate unchanged;
            password policy failures leave the token outstanding.

        Raises:
            HashingFailure: If hashing fails.
            PersistenceError: If the store fails.
        """
        verified = await self.verify(cmd.token)
        if isinstance(verified, Failure):
            return verified

        updated = await self._password_updater.update(
            verified.value,
            cmd.new_password,
            confirm_password=cmd.confirm_password,
        )
        if isinstance(updated, Failure):
            return updated

        user = updated.value
        await self._event_bus.publish(
            PasswordResetCompleted(
                user_id=user.id,
                primary_id=user.primary_id,
                email=user.email,
            )
        )

        return Success(value=RecoveryCompleted(primary_id=user.primary_id))
