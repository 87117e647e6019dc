"""Database models."""

from recoverkit.infrastructure.persistence.models.user import User

__all__ = ["User"]
