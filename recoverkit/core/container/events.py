"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Handlers are
subscribed once, when the bus is first built.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recoverkit.domain.protocols import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Returns:
        InMemoryEventBus with LoggingEventHandler subscribed to every
        recovery event.

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(PasswordResetCompleted(...))
    """
    from recoverkit.core.container.infrastructure import get_logger
    from recoverkit.infrastructure.events import InMemoryEventBus
    from recoverkit.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )

    event_bus = InMemoryEventBus(logger=get_logger())
    LoggingEventHandler(logger=get_logger()).register(event_bus)
    return event_bus
