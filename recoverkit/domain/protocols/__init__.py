"""Domain protocols (ports).

Infrastructure provides the adapters; application code depends only on
these structural interfaces.
"""

from recoverkit.domain.protocols.event_bus_protocol import (
    EventBusProtocol,
    EventHandler,
)
from recoverkit.domain.protocols.logger_protocol import LoggerProtocol
from recoverkit.domain.protocols.notifier_protocol import NotifierProtocol
from recoverkit.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from recoverkit.domain.protocols.recovery_store import RecoveryStore
from recoverkit.domain.protocols.task_runner_protocol import TaskRunnerProtocol
from recoverkit.domain.protocols.token_generator_protocol import (
    RecoveryTokenGeneratorProtocol,
)

__all__ = [
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "NotifierProtocol",
    "PasswordHashingProtocol",
    "RecoveryStore",
    "RecoveryTokenGeneratorProtocol",
    "TaskRunnerProtocol",
]
