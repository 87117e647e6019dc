"""Unrecoverable failures raised as exceptions.

Unlike DomainError, these are NOT returned inside Result types. They mean a
collaborator is broken (randomness source, hashing backend, storage) and the
current request cannot continue. The presentation layer maps them to a 500
Problem Details response; nothing retries them automatically.
"""


class RecoveryInfrastructureFailure(Exception):
    """Base class for fatal recovery failures."""


class EntropyFailure(RecoveryInfrastructureFailure):
    """The cryptographically secure random source failed."""


class HashingFailure(RecoveryInfrastructureFailure):
    """The password hashing backend failed."""


class PersistenceError(RecoveryInfrastructureFailure):
    """The recovery store could not read or write a user record."""
