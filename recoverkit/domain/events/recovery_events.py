"""Password recovery domain events.

Events carry a truncated fingerprint at most. The raw recovery secret never
appears in an event.

Triggers:
    - LoggingEventHandler: structured log line for every event
    - PasswordResetCompleted is also the after-password-reset hook; adopting
      systems subscribe to it (revoke sessions, send a notification, ...)
"""

from dataclasses import dataclass
from uuid import UUID

from recoverkit.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PasswordRecoveryRequested(DomainEvent):
    """Recovery token issued and persisted for an existing user.

    Attributes:
        user_id: User the token was issued for.
        primary_id: Account identifier.
        fingerprint_prefix: First characters of the stored fingerprint.
    """

    user_id: UUID
    primary_id: str
    fingerprint_prefix: str


@dataclass(frozen=True, kw_only=True)
class PasswordRecoveryRequestIgnored(DomainEvent):
    """Recovery requested for an unknown identifier.

    Internal only. The caller receives the same success as a real issuance.

    Attributes:
        primary_id: Identifier that was requested.
        reason: Why nothing was issued (e.g. "user_not_found").
    """

    primary_id: str
    reason: str


@dataclass(frozen=True, kw_only=True)
class PasswordRecoveryVerificationFailed(DomainEvent):
    """Recovery secret presented but rejected.

    Attributes:
        reason: Error code value (token_malformed, token_invalid, token_expired).
    """

    reason: str


@dataclass(frozen=True, kw_only=True)
class RecoveryEmailDeliveryFailed(DomainEvent):
    """Recovery link could not be delivered.

    The issued token stays valid; this is reported, not rolled back.

    Attributes:
        user_id: User the link was addressed to.
        error_type: Exception class name.
        error_message: Exception text.
    """

    user_id: UUID
    error_type: str
    error_message: str


@dataclass(frozen=True, kw_only=True)
class PasswordResetCompleted(DomainEvent):
    """Password replaced through a recovery token.

    Attributes:
        user_id: User whose password changed.
        primary_id: Account identifier; a new session is established for it.
        email: Contact address.
    """

    user_id: UUID
    primary_id: str
    email: str
