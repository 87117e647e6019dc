"""Domain entities."""

from recoverkit.domain.entities.user import User

__all__ = ["User"]
