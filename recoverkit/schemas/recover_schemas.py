"""Recovery request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints (relative to the mount path):
    GET  /recover           - Describe the recovery request form
    POST /recover           - Request a recovery email
    GET  /recover/complete  - Check a recovery token from an email link
    POST /recover/complete  - Set a new password with a recovery token
"""

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from recoverkit.core.constants import CONFIRM_PREFIX
from recoverkit.domain.validators import validate_primary_id


# =============================================================================
# Recovery Request
# =============================================================================


class RecoverFormResponse(BaseModel):
    """Response schema for GET /recover.

    Lists the fields POST /recover expects.
    """

    identifier_field: str = Field(
        default="primary_id",
        description="Field carrying the account identifier",
    )
    confirm_field: str = Field(
        default=f"{CONFIRM_PREFIX}primary_id",
        description="Field that must repeat the identifier",
    )


class RecoverRequest(BaseModel):
    """Request schema for POST /recover."""

    primary_id: str = Field(
        ...,
        description="Account identifier (username or user id)",
        examples=["alice"],
    )
    confirm_primary_id: str = Field(
        ...,
        description="Account identifier, repeated",
        examples=["alice"],
    )

    @field_validator("primary_id", "confirm_primary_id")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Strip the identifier and reject blanks."""
        return validate_primary_id(v)

    @field_validator("confirm_primary_id")
    @classmethod
    def identifiers_match(cls, v: str, info: ValidationInfo) -> str:
        """Require the confirmation to repeat the identifier."""
        primary_id = info.data.get("primary_id")
        if primary_id is not None and v != primary_id:
            raise ValueError("Identifiers do not match")
        return v


class RecoverResponse(BaseModel):
    """Response schema for POST /recover.

    Identical whether or not the account exists.
    """

    message: str = Field(..., description="Flash message for the user")
    location: str = Field(..., description="Where the client should go next")


# =============================================================================
# Recovery Completion
# =============================================================================


class RecoverTokenResponse(BaseModel):
    """Response schema for GET /recover/complete (token accepted)."""

    token: str = Field(
        ...,
        description="Token to echo back in POST /recover/complete",
    )


class RecoverCompleteRequest(BaseModel):
    """Request schema for POST /recover/complete.

    Password rules are enforced by the recovery flow so that violations come
    back together with the field they belong to.
    """

    token: str = Field(
        ...,
        min_length=1,
        description="Recovery token from the email link",
    )
    password: str = Field(
        ...,
        description="New password",
        examples=["NewPass1!"],
    )
    confirm_password: str | None = Field(
        default=None,
        description="New password, repeated",
        examples=["NewPass1!"],
    )


class RecoverCompleteResponse(BaseModel):
    """Response schema for POST /recover/complete (password replaced)."""

    message: str = Field(..., description="Flash message for the user")
    location: str = Field(..., description="Where the client should go next")
