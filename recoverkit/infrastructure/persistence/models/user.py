"""User database model.

Recovery columns:
    - recover_token: fingerprint of the outstanding secret (indexed for
      equality lookup, NULL when no recovery is in progress)
    - recover_token_expiry: expiry paired with recover_token
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from recoverkit.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User model for account recovery."""

    __tablename__ = "users"

    primary_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Account identifier (username or user id)",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Contact address for recovery links",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    recover_token: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="Fingerprint of the outstanding recovery secret",
    )

    recover_token_expiry: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Expiry of recover_token",
    )
