"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from recoverkit.core.errors import DomainError, ValidationError
    from recoverkit.core.errors import PersistenceError, HashingFailure
"""

from recoverkit.core.errors.common_errors import ValidationError
from recoverkit.core.errors.domain_error import DomainError
from recoverkit.core.errors.fatal_errors import (
    EntropyFailure,
    HashingFailure,
    PersistenceError,
    RecoveryInfrastructureFailure,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "RecoveryInfrastructureFailure",
    "EntropyFailure",
    "HashingFailure",
    "PersistenceError",
]
