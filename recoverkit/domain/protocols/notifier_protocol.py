"""NotifierProtocol - delivers recovery links to users.

The recovery flow supplies the fully formed URL; notifiers own the message
body and transport.

Implementations:
    - LoggingNotifier: recoverkit/infrastructure/email/logging_notifier.py
"""

from typing import Protocol


class NotifierProtocol(Protocol):
    """Protocol for recovery link delivery."""

    async def send(
        self,
        recipient: str,
        subject_prefix: str,
        reset_url: str,
    ) -> None:
        """Send a password reset link.

        Args:
            recipient: Destination email address.
            subject_prefix: Prefix prepended to the subject line.
            reset_url: Recovery completion URL carrying the secret.
        """
        ...
