"""HTTP request/response schemas."""

from recoverkit.schemas.recover_schemas import (
    RecoverCompleteRequest,
    RecoverCompleteResponse,
    RecoverFormResponse,
    RecoverRequest,
    RecoverResponse,
    RecoverTokenResponse,
)

__all__ = [
    "RecoverCompleteRequest",
    "RecoverCompleteResponse",
    "RecoverFormResponse",
    "RecoverRequest",
    "RecoverResponse",
    "RecoverTokenResponse",
]
