"""Recovery dependency factories (request-scoped).

Each request gets a store bound to its own database session and a
RecoveryFlow wired to the application-scoped singletons.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from recoverkit.core.config import get_settings
from recoverkit.core.container.events import get_event_bus
from recoverkit.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_notifier,
    get_password_service,
    get_task_runner,
    get_token_generator,
)

if TYPE_CHECKING:
    from recoverkit.application.services import RecoveryFlow
    from recoverkit.domain.protocols import RecoveryStore


async def get_recovery_store(
    session: AsyncSession = Depends(get_db_session),
) -> "RecoveryStore":
    """Get recovery store (request-scoped).

    Args:
        session: Database session for request duration.

    Returns:
        SQLAlchemyRecoveryStore bound to the session.
    """
    from recoverkit.infrastructure.persistence.repositories import (
        SQLAlchemyRecoveryStore,
    )

    return SQLAlchemyRecoveryStore(session=session)


async def get_recovery_flow(
    store: "RecoveryStore" = Depends(get_recovery_store),
) -> "RecoveryFlow":
    """Get RecoveryFlow (request-scoped).

    Emails go through the background task runner unless
    NOTIFY_SYNCHRONOUSLY is set.
    """
    from recoverkit.application.services import PasswordUpdater, RecoveryFlow

    settings = get_settings()

    return RecoveryFlow(
        store=store,
        token_generator=get_token_generator(),
        notifier=get_notifier(),
        password_updater=PasswordUpdater(
            store=store,
            password_service=get_password_service(),
        ),
        event_bus=get_event_bus(),
        logger=get_logger(),
        root_url=settings.root_url,
        mount_path=settings.mount_path,
        token_duration=settings.recover_token_duration,
        email_subject_prefix=settings.email_subject_prefix,
        task_runner=None if settings.notify_synchronously else get_task_runner(),
    )
