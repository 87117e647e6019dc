"""RFC 9457 Problem Details for HTTP APIs.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> error = ErrorDetail(
        ...     field="password",
        ...     code="password_too_weak",
        ...     message="Password must contain digit",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors (for validation failures)
        location: Optional path the client should go to next

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/token-expired",
        ...     title="Recovery Expired",
        ...     status=400,
        ...     detail="Account recovery request has expired. Please try again.",
        ...     instance="/auth/recover/complete",
        ...     location="/auth/recover",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/validation-failed"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Validation Failed"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[400],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Account recovery has failed. Please contact tech support."],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/auth/recover/complete"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    location: str | None = Field(
        None,
        description="Path the client should go to next",
    )
