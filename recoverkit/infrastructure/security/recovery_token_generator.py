"""Recovery token generator.

Token Strategy:
    - 32 random bytes from the OS CSPRNG (256 bits of entropy)
    - Transport form: URL-safe base64 (padded), embedded in the reset link
    - Fingerprint: SHA-256 of the raw bytes, standard base64, stored as the
      lookup key
    - Only the fingerprint is persisted. A storage read (backup, log leak,
      insider) cannot be turned into a working secret without the pre-image.
"""

import base64
import binascii
import hashlib
import re
import secrets

from recoverkit.core.constants import TOKEN_BYTES
from recoverkit.core.errors import EntropyFailure

_URLSAFE_BASE64 = re.compile(r"[A-Za-z0-9_-]+={0,2}")


class RecoveryTokenGenerator:
    """Recovery secret generation and fingerprinting.

    Usage:
        generator = RecoveryTokenGenerator()
        secret, fingerprint = generator.generate()

        # Store fingerprint, mail secret. Later:
        generator.fingerprint(secret) == fingerprint  # True
    """

    def __init__(self, token_bytes: int = TOKEN_BYTES) -> None:
        """Initialize generator.

        Args:
            token_bytes: Secret length in bytes (default: 32).

        Raises:
            ValueError: If token_bytes is below 32.
        """
        if token_bytes < TOKEN_BYTES:
            msg = f"Recovery secrets need at least {TOKEN_BYTES} bytes"
            raise ValueError(msg)
        self._token_bytes = token_bytes

    def generate(self) -> tuple[str, str]:
        """Generate a recovery secret and its fingerprint.

        Returns:
            (secret, fingerprint) where secret is URL-safe base64 and
            fingerprint is standard base64 of its SHA-256 digest.

        Raises:
            EntropyFailure: If the OS randomness source is unavailable.
        """
        try:
            raw = secrets.token_bytes(self._token_bytes)
        except (OSError, NotImplementedError) as exc:
            raise EntropyFailure("Secure random source failed") from exc

        secret = base64.urlsafe_b64encode(raw).decode("ascii")
        return secret, self.fingerprint_of(raw)

    def fingerprint(self, secret: str) -> str:
        """Recompute the fingerprint of a transport-encoded secret.

        Args:
            secret: URL-safe base64 secret as received from the user.

        Returns:
            Storage fingerprint.

        Raises:
            ValueError: If secret is empty or not valid URL-safe base64.
        """
        return self.fingerprint_of(self.decode(secret))

    @staticmethod
    def decode(secret: str) -> bytes:
        """Strictly decode the transport form of a secret.

        Raises:
            ValueError: On empty input, characters outside the URL-safe
                alphabet, or bad padding.
        """
        if not secret:
            raise ValueError("Recovery secret is empty")
        if _URLSAFE_BASE64.fullmatch(secret) is None:
            raise ValueError("Recovery secret is not URL-safe base64")
        try:
            raw = base64.urlsafe_b64decode(secret)
        except binascii.Error as exc:
            raise ValueError("Recovery secret is not valid base64") from exc
        if not raw:
            raise ValueError("Recovery secret is empty")
        return raw

    @staticmethod
    def fingerprint_of(raw: bytes) -> str:
        """Digest raw secret bytes into a storage fingerprint."""
        return base64.b64encode(hashlib.sha256(raw).digest()).decode("ascii")
