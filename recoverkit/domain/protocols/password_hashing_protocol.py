"""Password hashing protocol for domain layer.

Infrastructure provides the concrete implementation (BcryptPasswordService).
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface."""

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt.

        Raises:
            HashingFailure: If the hashing backend fails.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns False for invalid hash format (no exceptions).
        """
        ...
