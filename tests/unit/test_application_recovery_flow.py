"""Unit tests for RecoveryFlow.

Tests cover:
- Issuance for known users and silent success for unknown ones
- Verification: malformed, unknown, expired (hard boundary), valid
- Completion: single use, policy failures keep the token, session signal
- Overwrite semantics and last-write-wins on concurrent issuance
- Delivery: inline, through the task runner, failures logged only
- Domain events published along the way

Architecture:
- In-memory store with a write counter, real token generator and cheap bcrypt
- Controllable clock for expiry
"""

import asyncio
import base64
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from recoverkit.application.commands import CompleteRecovery, InitiateRecovery
from recoverkit.application.services import RecoveryCompleted, RecoveryInitiated
from recoverkit.core.enums import ErrorCode
from recoverkit.core.errors import EntropyFailure
from recoverkit.core.result import Failure, Success
from recoverkit.domain.errors import PasswordPolicyError, RecoveryError
from recoverkit.domain.events import (
    PasswordRecoveryRequested,
    PasswordRecoveryRequestIgnored,
    PasswordRecoveryVerificationFailed,
    PasswordResetCompleted,
    RecoveryEmailDeliveryFailed,
)
from recoverkit.infrastructure.events import InMemoryEventBus
from recoverkit.infrastructure.persistence.in_memory_store import InMemoryRecoveryStore
from recoverkit.infrastructure.security import (
    BcryptPasswordService,
    RecoveryTokenGenerator,
)
from recoverkit.infrastructure.tasks import AsyncioTaskRunner
from tests.conftest import (
    TOKEN_DURATION,
    RecordingNotifier,
    build_flow,
    create_user,
)


# =============================================================================
# Scenarios
# =============================================================================


@pytest.mark.unit
class TestRecoveryScenarios:
    """End-to-end scenarios through the flow."""

    @pytest.mark.asyncio
    async def test_alice_recovers_her_account(self, store, notifier, clock):
        """Initiate, verify, complete; the used token is then invalid."""
        flow = build_flow(store, notifier=notifier, clock=clock)

        initiated = await flow.initiate(InitiateRecovery(primary_id="alice"))
        assert isinstance(initiated, Success)
        secret = notifier.last_token

        clock.advance(timedelta(hours=1))
        verified = await flow.verify(secret)
        assert isinstance(verified, Success)
        assert verified.value.primary_id == "alice"

        completed = await flow.complete(
            CompleteRecovery(token=secret, new_password="NewPass1!")
        )
        assert isinstance(completed, Success)
        assert completed.value == RecoveryCompleted(primary_id="alice")

        alice = await store.find_by_identifier("alice")
        assert alice.recover_token is None
        assert alice.recover_token_expiry is None
        assert BcryptPasswordService(cost_factor=4).verify_password(
            "NewPass1!", alice.password_hash
        )

        again = await flow.verify(secret)
        assert isinstance(again, Failure)
        assert again.error.code == ErrorCode.TOKEN_INVALID

    @pytest.mark.asyncio
    async def test_bob_does_not_exist_and_nothing_is_written(self, store, notifier):
        """Unknown identifier: same success, no token, no write, no email."""
        flow = build_flow(store, notifier=notifier)

        result = await flow.initiate(InitiateRecovery(primary_id="bob"))

        assert isinstance(result, Success)
        assert result.value == RecoveryInitiated()
        assert store.save_count == 0
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_known_and_unknown_identifiers_look_identical(self, store):
        """Callers see exactly the same outcome for alice and bob."""
        flow = build_flow(store)

        alice = await flow.initiate(InitiateRecovery(primary_id="alice"))
        bob = await flow.initiate(InitiateRecovery(primary_id="bob"))

        assert alice == bob


# =============================================================================
# Initiate
# =============================================================================


@pytest.mark.unit
class TestInitiate:
    """Test token issuance."""

    @pytest.mark.asyncio
    async def test_persists_fingerprint_not_secret(self, store, notifier, clock):
        """Only the fingerprint and expiry are stored."""
        flow = build_flow(store, notifier=notifier, clock=clock)

        await flow.initiate(InitiateRecovery(primary_id="alice"))

        alice = await store.find_by_identifier("alice")
        secret = notifier.last_token
        assert alice.recover_token is not None
        assert alice.recover_token != secret
        assert alice.recover_token_expiry == clock.now + TOKEN_DURATION
        assert store.save_count == 1

    @pytest.mark.asyncio
    async def test_sends_reset_link_to_registered_email(self, store, notifier):
        """Link has the documented shape and goes to the stored address."""
        flow = build_flow(store, notifier=notifier, email_subject_prefix="[App] ")

        await flow.initiate(InitiateRecovery(primary_id="alice"))

        sent = notifier.sent[-1]
        assert sent["recipient"] == "alice@example.com"
        assert sent["subject_prefix"] == "[App] "
        assert sent["reset_url"].startswith(
            "https://example.com/auth/recover/complete?token="
        )

    @pytest.mark.asyncio
    async def test_second_issuance_invalidates_first(self, store, notifier):
        """Overwrite semantics: the old secret stops working."""
        flow = build_flow(store, notifier=notifier)

        await flow.initiate(InitiateRecovery(primary_id="alice"))
        first = notifier.last_token
        await flow.initiate(InitiateRecovery(primary_id="alice"))
        second = notifier.last_token

        old = await flow.verify(first)
        new = await flow.verify(second)

        assert isinstance(old, Failure)
        assert old.error.code == ErrorCode.TOKEN_INVALID
        assert isinstance(new, Success)

    @pytest.mark.asyncio
    async def test_concurrent_issuance_is_last_write_wins(self, store, notifier):
        """Two overlapping requests leave exactly one redeemable secret."""
        flow = build_flow(store, notifier=notifier)

        await asyncio.gather(
            flow.initiate(InitiateRecovery(primary_id="alice")),
            flow.initiate(InitiateRecovery(primary_id="alice")),
        )

        assert len(notifier.tokens) == 2
        outcomes = [await flow.verify(token) for token in notifier.tokens]
        assert sum(isinstance(o, Success) for o in outcomes) == 1

    @pytest.mark.asyncio
    async def test_entropy_failure_propagates_without_write(self, store):
        """A broken random source is fatal and nothing is persisted."""
        token_generator = Mock()
        token_generator.generate.side_effect = EntropyFailure("no entropy")
        flow = build_flow(store, token_generator=token_generator)

        with pytest.raises(EntropyFailure):
            await flow.initiate(InitiateRecovery(primary_id="alice"))

        assert store.save_count == 0

    def test_build_recovery_url_without_mount_path(self, store):
        """Empty mount path yields a root-level completion path."""
        flow = build_flow(store, mount_path="")

        assert (
            flow.build_recovery_url("abc=")
            == "https://example.com/recover/complete?token=abc%3D"
        )

    def test_rejects_non_positive_duration(self, store):
        """A zero lifetime would issue dead tokens."""
        from recoverkit.application.services import PasswordUpdater, RecoveryFlow

        with pytest.raises(ValueError):
            RecoveryFlow(
                store=store,
                token_generator=Mock(),
                notifier=RecordingNotifier(),
                password_updater=PasswordUpdater(store=store, password_service=Mock()),
                event_bus=AsyncMock(),
                logger=Mock(),
                root_url="https://example.com",
                mount_path="/auth",
                token_duration=timedelta(0),
            )


# =============================================================================
# Delivery
# =============================================================================


@pytest.mark.unit
class TestDelivery:
    """Test reset link delivery."""

    @pytest.mark.asyncio
    async def test_notifier_failure_is_logged_and_token_survives(self, store):
        """Delivery failure does not undo the issuance."""
        logger = Mock()
        notifier = RecordingNotifier(error=RuntimeError("smtp down"))
        flow = build_flow(store, notifier=notifier, logger=logger)

        result = await flow.initiate(InitiateRecovery(primary_id="alice"))

        assert isinstance(result, Success)
        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "recovery_email_failed"
        assert isinstance(await flow.verify(notifier.last_token), Success)

    @pytest.mark.asyncio
    async def test_background_delivery_through_task_runner(self, store, notifier):
        """With a task runner, sending happens after initiate returns."""
        runner = AsyncioTaskRunner(logger=Mock())
        flow = build_flow(store, notifier=notifier, task_runner=runner)

        result = await flow.initiate(InitiateRecovery(primary_id="alice"))

        assert isinstance(result, Success)
        assert notifier.sent == []
        assert runner.pending == 1

        await runner.drain()

        assert len(notifier.sent) == 1
        assert runner.pending == 0

    @pytest.mark.asyncio
    async def test_background_delivery_failure_is_logged(self, store):
        """A failing background send is reported through the logger."""
        logger = Mock()
        runner = AsyncioTaskRunner(logger=logger)
        flow = build_flow(
            store,
            notifier=RecordingNotifier(error=RuntimeError("smtp down")),
            logger=logger,
            task_runner=runner,
        )

        await flow.initiate(InitiateRecovery(primary_id="alice"))
        await runner.drain()

        messages = [c.args[0] for c in logger.error.call_args_list]
        assert "recovery_email_failed" in messages
        assert store.save_count == 1


# =============================================================================
# Verify
# =============================================================================


@pytest.mark.unit
class TestVerify:
    """Test token verification."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "%%%", "not base64!", "abc"])
    async def test_malformed_tokens(self, store, token):
        """Undecodable input fails as TOKEN_MALFORMED."""
        flow = build_flow(store)

        result = await flow.verify(token)

        assert isinstance(result, Failure)
        assert isinstance(result.error, RecoveryError)
        assert result.error.code == ErrorCode.TOKEN_MALFORMED

    @pytest.mark.asyncio
    async def test_standard_base64_form_of_issued_token_is_malformed(
        self, notifier, clock
    ):
        """Only the URL-safe form of an issued secret is redeemable."""
        raw = bytes([0xFB, 0xFF] * 16)
        generator = Mock()
        generator.generate.return_value = (
            base64.urlsafe_b64encode(raw).decode("ascii"),
            RecoveryTokenGenerator.fingerprint_of(raw),
        )
        generator.fingerprint.side_effect = RecoveryTokenGenerator().fingerprint
        store = InMemoryRecoveryStore(users=[create_user("alice")])
        flow = build_flow(
            store, notifier=notifier, clock=clock, token_generator=generator
        )
        await flow.initiate(InitiateRecovery(primary_id="alice"))
        assert isinstance(await flow.verify(notifier.last_token), Success)

        result = await flow.verify(base64.b64encode(raw).decode("ascii"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_MALFORMED

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid(self, store):
        """A well-formed secret nobody holds fails as TOKEN_INVALID."""
        flow = build_flow(store)
        secret, _ = flow._token_generator.generate()

        result = await flow.verify(secret)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    @pytest.mark.asyncio
    async def test_expiry_boundary(self, store, notifier, clock):
        """Valid strictly before expiry, expired from expiry onwards."""
        flow = build_flow(store, notifier=notifier, clock=clock)
        await flow.initiate(InitiateRecovery(primary_id="alice"))
        secret = notifier.last_token

        clock.advance(TOKEN_DURATION - timedelta(seconds=1))
        assert isinstance(await flow.verify(secret), Success)

        clock.advance(timedelta(seconds=1))
        at_expiry = await flow.verify(secret)
        assert isinstance(at_expiry, Failure)
        assert at_expiry.error.code == ErrorCode.TOKEN_EXPIRED
        assert at_expiry.error.is_expired

        clock.advance(timedelta(days=1))
        later = await flow.verify(secret)
        assert isinstance(later, Failure)
        assert later.error.code == ErrorCode.TOKEN_EXPIRED

    @pytest.mark.asyncio
    async def test_expired_token_cannot_complete(self, store, notifier, clock):
        """Completion with an expired token changes nothing."""
        flow = build_flow(store, notifier=notifier, clock=clock)
        await flow.initiate(InitiateRecovery(primary_id="alice"))
        before = await store.find_by_identifier("alice")

        clock.advance(TOKEN_DURATION)
        result = await flow.complete(
            CompleteRecovery(token=notifier.last_token, new_password="NewPass1!")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        after = await store.find_by_identifier("alice")
        assert after.password_hash == before.password_hash


# =============================================================================
# Complete
# =============================================================================


@pytest.mark.unit
class TestComplete:
    """Test token consumption."""

    @pytest.mark.asyncio
    async def test_policy_failure_keeps_token_redeemable(self, store, notifier):
        """A rejected password leaves the token outstanding."""
        flow = build_flow(store, notifier=notifier)
        await flow.initiate(InitiateRecovery(primary_id="alice"))
        secret = notifier.last_token
        writes_before = store.save_count

        result = await flow.complete(CompleteRecovery(token=secret, new_password="weak"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, PasswordPolicyError)
        assert result.error.field == "password"
        assert store.save_count == writes_before
        assert isinstance(await flow.verify(secret), Success)

    @pytest.mark.asyncio
    async def test_confirmation_mismatch(self, store, notifier):
        """Mismatched confirmation is a policy failure on confirm_password."""
        flow = build_flow(store, notifier=notifier)
        await flow.initiate(InitiateRecovery(primary_id="alice"))

        result = await flow.complete(
            CompleteRecovery(
                token=notifier.last_token,
                new_password="NewPass1!",
                confirm_password="NewPass2!",
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PASSWORD_MISMATCH
        assert result.error.field == "confirm_password"

    @pytest.mark.asyncio
    async def test_malformed_token_fails_before_policy(self, store):
        """Token problems are reported even when the password is also bad."""
        flow = build_flow(store)

        result = await flow.complete(CompleteRecovery(token="", new_password="weak"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_MALFORMED

    @pytest.mark.asyncio
    async def test_complete_only_touches_token_holder(self, notifier):
        """Other users keep their state when one user completes recovery."""
        store = InMemoryRecoveryStore(
            users=[create_user("alice"), create_user("carol", password_hash="carol")]
        )
        flow = build_flow(store, notifier=notifier)
        await flow.initiate(InitiateRecovery(primary_id="carol"))
        carol_secret = notifier.last_token
        await flow.initiate(InitiateRecovery(primary_id="alice"))

        await flow.complete(
            CompleteRecovery(token=notifier.last_token, new_password="NewPass1!")
        )

        carol = await store.find_by_identifier("carol")
        assert carol.password_hash == "carol"
        assert isinstance(await flow.verify(carol_secret), Success)

    def test_command_repr_hides_secrets(self):
        """Token and passwords never show up in reprs."""
        cmd = CompleteRecovery(
            token="s3cr3t-token", new_password="NewPass1!", confirm_password="NewPass1!"
        )

        assert "s3cr3t-token" not in repr(cmd)
        assert "NewPass1!" not in repr(cmd)


# =============================================================================
# Events
# =============================================================================


@pytest.mark.unit
class TestRecoveryEvents:
    """Test domain events published by the flow."""

    @staticmethod
    def _bus_with_spies():
        bus = InMemoryEventBus(logger=Mock())
        spies = {}
        for event_type in (
            PasswordRecoveryRequested,
            PasswordRecoveryRequestIgnored,
            PasswordRecoveryVerificationFailed,
            PasswordResetCompleted,
            RecoveryEmailDeliveryFailed,
        ):
            spies[event_type] = AsyncMock()
            bus.subscribe(event_type, spies[event_type])
        return bus, spies

    @pytest.mark.asyncio
    async def test_issuance_publishes_requested_with_fingerprint_prefix(
        self, store, notifier
    ):
        """The event carries only a short fingerprint prefix."""
        bus, spies = self._bus_with_spies()
        flow = build_flow(store, notifier=notifier, event_bus=bus)

        await flow.initiate(InitiateRecovery(primary_id="alice"))

        event = spies[PasswordRecoveryRequested].await_args.args[0]
        alice = await store.find_by_identifier("alice")
        assert event.primary_id == "alice"
        assert event.fingerprint_prefix == alice.recover_token[:8]
        assert len(event.fingerprint_prefix) == 8

    @pytest.mark.asyncio
    async def test_unknown_identifier_publishes_ignored(self, store):
        """Unknown identifiers are visible internally only."""
        bus, spies = self._bus_with_spies()
        flow = build_flow(store, event_bus=bus)

        await flow.initiate(InitiateRecovery(primary_id="bob"))

        event = spies[PasswordRecoveryRequestIgnored].await_args.args[0]
        assert event.primary_id == "bob"
        assert event.reason == ErrorCode.USER_NOT_FOUND.value
        spies[PasswordRecoveryRequested].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_verification_failure_publishes_reason(self, store):
        """Rejected tokens publish the error code."""
        bus, spies = self._bus_with_spies()
        flow = build_flow(store, event_bus=bus)

        await flow.verify("")

        event = spies[PasswordRecoveryVerificationFailed].await_args.args[0]
        assert event.reason == ErrorCode.TOKEN_MALFORMED.value

    @pytest.mark.asyncio
    async def test_completion_publishes_reset_completed(self, store, notifier):
        """The after-reset hook fires once the password is stored."""
        bus, spies = self._bus_with_spies()
        flow = build_flow(store, notifier=notifier, event_bus=bus)
        await flow.initiate(InitiateRecovery(primary_id="alice"))

        await flow.complete(
            CompleteRecovery(token=notifier.last_token, new_password="NewPass1!")
        )

        event = spies[PasswordResetCompleted].await_args.args[0]
        assert event.primary_id == "alice"
        assert event.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_delivery_failure_publishes_event(self, store):
        """Failed deliveries are published for operators."""
        bus, spies = self._bus_with_spies()
        flow = build_flow(
            store,
            notifier=RecordingNotifier(error=RuntimeError("smtp down")),
            event_bus=bus,
        )

        await flow.initiate(InitiateRecovery(primary_id="alice"))

        event = spies[RecoveryEmailDeliveryFailed].await_args.args[0]
        assert event.error_type == "RuntimeError"
        assert event.error_message == "smtp down"

    @pytest.mark.asyncio
    async def test_failing_hook_does_not_fail_completion(self, store, notifier):
        """Event handlers are fail-open."""
        bus = InMemoryEventBus(logger=Mock())
        bus.subscribe(PasswordResetCompleted, AsyncMock(side_effect=RuntimeError("x")))
        flow = build_flow(store, notifier=notifier, event_bus=bus)
        await flow.initiate(InitiateRecovery(primary_id="alice"))

        result = await flow.complete(
            CompleteRecovery(token=notifier.last_token, new_password="NewPass1!")
        )

        assert isinstance(result, Success)


@pytest.mark.unit
def test_clock_defaults_to_aware_utc(store):
    """Without an injected clock, expiries are timezone-aware."""
    from recoverkit.application.services import PasswordUpdater, RecoveryFlow

    notifier = RecordingNotifier()
    flow = RecoveryFlow(
        store=store,
        token_generator=build_flow(store)._token_generator,
        notifier=notifier,
        password_updater=PasswordUpdater(store=store, password_service=Mock()),
        event_bus=InMemoryEventBus(logger=Mock()),
        logger=Mock(),
        root_url="https://example.com/",
        mount_path="/auth",
        token_duration=TOKEN_DURATION,
    )

    assert flow._clock().tzinfo is not None
    assert flow.build_recovery_url("x") == (
        "https://example.com/auth/recover/complete?token=x"
    )
