"""Background task runners."""

from recoverkit.infrastructure.tasks.asyncio_task_runner import AsyncioTaskRunner

__all__ = ["AsyncioTaskRunner"]
