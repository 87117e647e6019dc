"""TaskRunnerProtocol - executes fire-and-forget coroutines.

Handed to the recovery flow by the caller. Implementations own the task's
lifetime and MUST capture and log its failure instead of dropping it.

Implementations:
    - AsyncioTaskRunner: recoverkit/infrastructure/tasks/asyncio_task_runner.py
"""

from collections.abc import Coroutine
from typing import Any, Protocol


class TaskRunnerProtocol(Protocol):
    """Protocol for background task execution."""

    def submit(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        """Schedule coro to run in the background.

        Args:
            coro: Coroutine to run.
            name: Task name used in failure logs.
        """
        ...
