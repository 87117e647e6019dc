"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console)
- Database (SQLAlchemy async)
- Password hashing (bcrypt)
- Recovery token generation
- Email (stub)
- Background tasks (asyncio)
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from recoverkit.core.config import get_settings
from recoverkit.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from recoverkit.domain.protocols import (
        LoggerProtocol,
        NotifierProtocol,
        PasswordHashingProtocol,
        RecoveryTokenGeneratorProtocol,
    )
    from recoverkit.infrastructure.tasks import AsyncioTaskRunner


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from recoverkit.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    return ConsoleAdapter(use_json=not settings.is_development, level=level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from BCRYPT_ROUNDS (default 12).
    """
    from recoverkit.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_generator() -> "RecoveryTokenGeneratorProtocol":
    """Get recovery token generator singleton (app-scoped)."""
    from recoverkit.infrastructure.security import RecoveryTokenGenerator

    return RecoveryTokenGenerator()


@lru_cache()
def get_notifier() -> "NotifierProtocol":
    """Get email notifier singleton (app-scoped).

    Every environment currently uses StubEmailNotifier, which logs the
    composed message instead of delivering it.
    """
    from recoverkit.infrastructure.email import StubEmailNotifier

    return StubEmailNotifier(logger=get_logger(), sender=get_settings().email_from)


@lru_cache()
def get_task_runner() -> "AsyncioTaskRunner":
    """Get background task runner singleton (app-scoped)."""
    from recoverkit.infrastructure.tasks import AsyncioTaskRunner

    return AsyncioTaskRunner(logger=get_logger())


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
