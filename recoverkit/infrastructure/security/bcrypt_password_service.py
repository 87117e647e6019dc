"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt.

Security:
    - Salted, one-way, adaptive cost
    - Cost factor configurable (default 12, ~250ms per hash)
"""

import bcrypt

from recoverkit.core.constants import BCRYPT_ROUNDS_DEFAULT
from recoverkit.core.errors import HashingFailure


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=12)
        password_hash = password_service.hash_password("SecurePass123!")
        password_service.verify_password("SecurePass123!", password_hash)  # True
    """

    def __init__(self, cost_factor: int = BCRYPT_ROUNDS_DEFAULT) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor. Each +1 doubles computation time.
                Values below 10 are only accepted for tests.

        Raises:
            ValueError: If cost_factor is outside 4..31 (bcrypt's own range).
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).

        Raises:
            HashingFailure: If bcrypt rejects the input or fails.
        """
        try:
            salt = bcrypt.gensalt(rounds=self._cost_factor)
            password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        except (ValueError, TypeError) as exc:
            raise HashingFailure("Password hashing failed") from exc

        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash, False otherwise (including for
            malformed hashes).
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
