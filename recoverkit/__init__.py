"""recoverkit - password recovery token service."""

__version__ = "0.1.0"
