"""RecoveryTokenGeneratorProtocol - mints recovery secrets.

Implementations:
    - RecoveryTokenGenerator: recoverkit/infrastructure/security/recovery_token_generator.py
"""

from typing import Protocol


class RecoveryTokenGeneratorProtocol(Protocol):
    """Protocol for recovery secret generation and fingerprinting."""

    def generate(self) -> tuple[str, str]:
        """Generate a (secret, fingerprint) pair.

        Returns:
            URL-safe transport form of the secret and its storage fingerprint.

        Raises:
            EntropyFailure: If the random source fails.
        """
        ...

    def fingerprint(self, secret: str) -> str:
        """Recompute the fingerprint of a transport-encoded secret.

        Raises:
            ValueError: If secret is empty or cannot be decoded.
        """
        ...
