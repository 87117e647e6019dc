"""Logging event handler for recovery domain events.

Log Levels:
    - INFO: issued tokens and completed resets
    - WARNING: ignored requests, rejected tokens, failed deliveries

Ignored requests are logged for operators only; callers never learn about
them.
"""

from recoverkit.domain.events.recovery_events import (
    PasswordRecoveryRequested,
    PasswordRecoveryRequestIgnored,
    PasswordRecoveryVerificationFailed,
    PasswordResetCompleted,
    RecoveryEmailDeliveryFailed,
)
from recoverkit.domain.protocols.event_bus_protocol import EventBusProtocol
from recoverkit.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of recovery events.

    Example:
        >>> handler = LoggingEventHandler(logger=get_logger())
        >>> handler.register(event_bus)
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize logging handler with logger."""
        self._logger = logger

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handler method to its event."""
        event_bus.subscribe(
            PasswordRecoveryRequested, self.handle_password_recovery_requested
        )
        event_bus.subscribe(
            PasswordRecoveryRequestIgnored,
            self.handle_password_recovery_request_ignored,
        )
        event_bus.subscribe(
            PasswordRecoveryVerificationFailed,
            self.handle_password_recovery_verification_failed,
        )
        event_bus.subscribe(
            RecoveryEmailDeliveryFailed, self.handle_recovery_email_delivery_failed
        )
        event_bus.subscribe(PasswordResetCompleted, self.handle_password_reset_completed)

    async def handle_password_recovery_requested(
        self,
        event: PasswordRecoveryRequested,
    ) -> None:
        """Log issued recovery token (INFO level)."""
        self._logger.info(
            "password_recovery_requested",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            primary_id=event.primary_id,
            fingerprint_prefix=event.fingerprint_prefix,
        )

    async def handle_password_recovery_request_ignored(
        self,
        event: PasswordRecoveryRequestIgnored,
    ) -> None:
        """Log recovery request for an unknown account (WARNING level)."""
        self._logger.warning(
            "password_recovery_request_ignored",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            primary_id=event.primary_id,
            reason=event.reason,
        )

    async def handle_password_recovery_verification_failed(
        self,
        event: PasswordRecoveryVerificationFailed,
    ) -> None:
        """Log rejected recovery token (WARNING level)."""
        self._logger.warning(
            "password_recovery_verification_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            reason=event.reason,
        )

    async def handle_recovery_email_delivery_failed(
        self,
        event: RecoveryEmailDeliveryFailed,
    ) -> None:
        """Log failed link delivery (WARNING level)."""
        self._logger.warning(
            "recovery_email_delivery_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            error_type=event.error_type,
            error_message=event.error_message,
        )

    async def handle_password_reset_completed(
        self,
        event: PasswordResetCompleted,
    ) -> None:
        """Log completed password reset (INFO level)."""
        self._logger.info(
            "password_reset_completed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            primary_id=event.primary_id,
        )
