"""Email notifier implementations.

- StubEmailNotifier: composes the message and logs it (development/testing)
"""

from recoverkit.infrastructure.email.stub_email_notifier import StubEmailNotifier

__all__ = [
    "StubEmailNotifier",
]
