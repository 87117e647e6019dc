"""Global exception handlers for the FastAPI application.

Convert exceptions into RFC 9457 Problem Details responses.

Handlers:
    http_exception_handler: Converts HTTPException (404, 405, ...)
    validation_exception_handler: Converts RequestValidationError (422)
    infrastructure_failure_handler: Converts fatal recovery failures (500)

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
    problem_response: Build a Problem Details JSONResponse
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recoverkit.core.config import get_settings
from recoverkit.core.container import get_logger
from recoverkit.core.errors import RecoveryInfrastructureFailure
from recoverkit.presentation.errors.problem_details import ErrorDetail, ProblemDetails

# HTTP status code to (title, slug) mapping
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    415: ("Unsupported Media Type", "unsupported-media-type"),
    422: ("Validation Failed", "validation-failed"),
    500: ("Internal Server Error", "internal-server-error"),
}


def _get_status_title(status_code: int) -> str:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[0]


def _get_error_slug(status_code: int) -> str:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[1]


def problem_response(
    request: Request,
    *,
    status_code: int,
    slug: str,
    title: str,
    detail: str,
    errors: list[ErrorDetail] | None = None,
    location: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a Problem Details JSONResponse.

    Args:
        request: Current request (its path becomes ``instance``).
        status_code: HTTP status.
        slug: Kebab-case problem type, appended to ``<root_url>/errors/``.
        title: Short summary.
        detail: Explanation for this occurrence.
        errors: Field-level errors.
        location: Path the client should go to next.
        headers: Extra response headers.
    """
    problem = ProblemDetails(
        type=f"{get_settings().root_url}/errors/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors,
        location=location,
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to RFC 9457 Problem Details response.

    Covers the framework's own 404/405 responses as well as raised ones.
    """
    assert isinstance(exc, StarletteHTTPException)

    return problem_response(
        request,
        status_code=exc.status_code,
        slug=_get_error_slug(exc.status_code),
        title=_get_status_title(exc.status_code),
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to Problem Details with field errors.

    Example:
        >>> # POST /auth/recover with mismatched confirmation
        >>> # {
        >>> #   "status": 422,
        >>> #   "errors": [
        >>> #     {"field": "confirm_primary_id", "code": "value_error", ...}
        >>> #   ]
        >>> # }
    """
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        # ["body", "primary_id"] -> "primary_id"
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p not in ("body", "query")]
        field_name = ".".join(field_parts) if field_parts else "unknown"

        field_errors.append(
            ErrorDetail(
                field=field_name,
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    return problem_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        slug="validation-failed",
        title="Validation Failed",
        detail="Request validation failed. Check 'errors' for details.",
        errors=field_errors or None,
    )


async def infrastructure_failure_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle fatal recovery failures (entropy, hashing, persistence).

    Logs the failure and answers 500 without leaking internals.
    """
    get_logger().error(
        "recovery_infrastructure_failure",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )

    return problem_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        slug="internal-server-error",
        title="Internal Server Error",
        detail="An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(
        RecoveryInfrastructureFailure, infrastructure_failure_handler
    )
