"""Asyncio background task runner.

Runs fire-and-forget coroutines on the current event loop while keeping a
strong reference to each task until it finishes. A task that raises is
logged at ERROR level from its done-callback; nothing is retried.

Usage:
    runner = AsyncioTaskRunner(logger=get_logger())
    runner.submit(notifier.send(...), name="recovery_email")

    # On shutdown
    await runner.drain()
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

from recoverkit.domain.protocols.logger_protocol import LoggerProtocol


class AsyncioTaskRunner:
    """Tracks background tasks and logs their failures.

    Implements TaskRunnerProtocol (structural typing).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize runner.

        Args:
            logger: Logger for task failures.
        """
        self._logger = logger
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of tasks not yet finished."""
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        """Schedule coro on the running loop.

        Must be called from inside a running event loop.
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            self._logger.warning("background_task_cancelled", task_name=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self._logger.error(
                "background_task_failed",
                error=exc if isinstance(exc, Exception) else None,
                task_name=task.get_name(),
            )

    async def drain(self) -> None:
        """Wait for every outstanding task to finish.

        Task failures are already logged by the done-callback, so they are
        collected here rather than re-raised.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
