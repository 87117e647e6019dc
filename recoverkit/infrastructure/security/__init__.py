"""Security services (adapters)."""

from recoverkit.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from recoverkit.infrastructure.security.recovery_token_generator import (
    RecoveryTokenGenerator,
)

__all__ = [
    "BcryptPasswordService",
    "RecoveryTokenGenerator",
]
