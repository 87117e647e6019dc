"""Domain events package."""

from recoverkit.domain.events.base_event import DomainEvent
from recoverkit.domain.events.recovery_events import (
    PasswordRecoveryRequested,
    PasswordRecoveryRequestIgnored,
    PasswordRecoveryVerificationFailed,
    PasswordResetCompleted,
    RecoveryEmailDeliveryFailed,
)

__all__ = [
    "DomainEvent",
    "PasswordRecoveryRequested",
    "PasswordRecoveryRequestIgnored",
    "PasswordRecoveryVerificationFailed",
    "PasswordResetCompleted",
    "RecoveryEmailDeliveryFailed",
]
