"""Container module - Centralized dependency injection.

Re-exports every factory so callers can write:

    from recoverkit.core.container import get_logger, get_recovery_flow

Organized by concern:
- infrastructure: logging, database, hashing, tokens, email, tasks
- events: event bus and subscriptions
- recovery: request-scoped store and RecoveryFlow
"""

from recoverkit.core.container.events import get_event_bus
from recoverkit.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_notifier,
    get_password_service,
    get_task_runner,
    get_token_generator,
)
from recoverkit.core.container.recovery import get_recovery_flow, get_recovery_store

__all__ = [
    "get_database",
    "get_db_session",
    "get_event_bus",
    "get_logger",
    "get_notifier",
    "get_password_service",
    "get_recovery_flow",
    "get_recovery_store",
    "get_task_runner",
    "get_token_generator",
]
