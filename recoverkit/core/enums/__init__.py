"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from recoverkit.core.enums import ErrorCode, Environment
"""

from recoverkit.core.enums.environment import Environment
from recoverkit.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
