"""Application services."""

from recoverkit.application.services.password_updater import PasswordUpdater
from recoverkit.application.services.recovery_flow import (
    RecoveryCompleted,
    RecoveryFlow,
    RecoveryInitiated,
)

__all__ = [
    "PasswordUpdater",
    "RecoveryCompleted",
    "RecoveryFlow",
    "RecoveryInitiated",
]
