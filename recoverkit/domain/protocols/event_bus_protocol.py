"""Event bus protocol (port) for domain events.

Implementations:
    - InMemoryEventBus: recoverkit/infrastructure/events/in_memory_event_bus.py
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from recoverkit.domain.events.base_event import DomainEvent

# Type alias for event handler functions
EventHandler = Callable[[Any], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Publishers never see handler failures (fail-open).
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register an async handler for an exact event type."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every handler registered for type(event)."""
        ...
