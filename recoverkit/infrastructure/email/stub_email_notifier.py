"""Stub email notifier.

Builds the password reset message exactly as a real transport would receive
it (text and HTML parts rendered from the Jinja2 templates in ``templates/``),
then logs it instead of sending. The reset URL contains the recovery
secret, so it is logged at DEBUG only.
"""

from dataclasses import dataclass
from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from recoverkit.core.constants import PASSWORD_RESET_SUBJECT
from recoverkit.domain.protocols.logger_protocol import LoggerProtocol


@dataclass(frozen=True, slots=True)
class EmailMessage:
    """Outgoing email."""

    to: tuple[str, ...]
    sender: str
    subject: str
    text_body: str
    html_body: str


@lru_cache
def _templates() -> Environment:
    # .html templates are autoescaped, .txt templates are not
    return Environment(
        loader=PackageLoader("recoverkit.infrastructure.email", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html",)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def build_password_reset_email(
    recipient: str,
    sender: str,
    subject_prefix: str,
    reset_url: str,
) -> EmailMessage:
    """Compose the password reset email (text and HTML parts)."""
    templates = _templates()
    return EmailMessage(
        to=(recipient,),
        sender=sender,
        subject=f"{subject_prefix}{PASSWORD_RESET_SUBJECT}",
        text_body=templates.get_template("password_reset.txt").render(
            reset_url=reset_url
        ),
        html_body=templates.get_template("password_reset.html").render(
            reset_url=reset_url
        ),
    )


class StubEmailNotifier:
    """Notifier that logs recovery emails instead of sending them.

    Implements NotifierProtocol (structural typing).
    """

    def __init__(self, logger: LoggerProtocol, sender: str) -> None:
        """Initialize notifier.

        Args:
            logger: Structured logger.
            sender: From address.
        """
        self._logger = logger
        self._sender = sender

    async def send(
        self,
        recipient: str,
        subject_prefix: str,
        reset_url: str,
    ) -> None:
        """Log the password reset email."""
        message = build_password_reset_email(
            recipient=recipient,
            sender=self._sender,
            subject_prefix=subject_prefix,
            reset_url=reset_url,
        )
        self._logger.info(
            "stub_email_sent",
            to=list(message.to),
            sender=message.sender,
            subject=message.subject,
        )
        self._logger.debug(
            "stub_email_body",
            body=message.text_body,
            html_body=message.html_body,
        )
