"""Application commands."""

from recoverkit.application.commands.recovery_commands import (
    CompleteRecovery,
    InitiateRecovery,
)

__all__ = ["CompleteRecovery", "InitiateRecovery"]
