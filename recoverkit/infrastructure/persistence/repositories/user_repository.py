"""SQLAlchemyRecoveryStore - SQLAlchemy implementation of RecoveryStore.

Adapter for hexagonal architecture. Maps between domain User entities and the
``users`` table. Each ``save`` is one commit, so the recovery fields and the
password hash are never observable half-written.
"""

from datetime import UTC, datetime

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recoverkit.core.errors import PersistenceError
from recoverkit.domain.entities.user import User
from recoverkit.infrastructure.persistence.models.user import User as UserModel


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class SQLAlchemyRecoveryStore:
    """SQLAlchemy implementation of RecoveryStore protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with db.get_session() as session:
        ...     store = SQLAlchemyRecoveryStore(session)
        ...     user = await store.find_by_identifier("alice")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def find_by_identifier(self, primary_id: str) -> User | None:
        """Find user by primary identifier."""
        stmt = select(UserModel).where(UserModel.primary_id == primary_id)
        return await self._find_one(stmt)

    async def find_by_fingerprint(self, fingerprint: str) -> User | None:
        """Find user holding the given recovery fingerprint."""
        stmt = select(UserModel).where(UserModel.recover_token == fingerprint)
        return await self._find_one(stmt)

    async def save(self, user: User) -> None:
        """Insert or update user in a single commit.

        Raises:
            PersistenceError: If the database rejects the write.
        """
        try:
            user_model = await self.session.get(UserModel, user.id)
            if user_model is None:
                self.session.add(self._to_model(user))
            else:
                user_model.primary_id = user.primary_id
                user_model.email = user.email
                user_model.password_hash = user.password_hash
                user_model.recover_token = user.recover_token
                user_model.recover_token_expiry = user.recover_token_expiry
                user_model.updated_at = user.updated_at
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError(f"Failed to save user {user.id}") from exc

    async def _find_one(self, stmt: Select[tuple[UserModel]]) -> User | None:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to load user") from exc
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            primary_id=user_model.primary_id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            recover_token=user_model.recover_token,
            recover_token_expiry=_as_utc(user_model.recover_token_expiry),
            created_at=_as_utc(user_model.created_at),
            updated_at=_as_utc(user_model.updated_at),
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            primary_id=user.primary_id,
            email=user.email,
            password_hash=user.password_hash,
            recover_token=user.recover_token,
            recover_token_expiry=user.recover_token_expiry,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
