"""Repository implementations."""

from recoverkit.infrastructure.persistence.repositories.user_repository import (
    SQLAlchemyRecoveryStore,
)

__all__ = ["SQLAlchemyRecoveryStore"]
