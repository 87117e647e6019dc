"""Recovery router.

Endpoints (mounted under settings.mount_path):
    GET  /recover           - Describe the recovery request form
    POST /recover           - Request a recovery email (always 200)
    GET  /recover/complete  - Check a recovery token
    POST /recover/complete  - Set a new password and start a session
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from recoverkit.application.commands import CompleteRecovery, InitiateRecovery
from recoverkit.application.services import RecoveryFlow
from recoverkit.core.config import Settings, get_settings
from recoverkit.core.constants import (
    RECOVER_FAILED_MESSAGE,
    RECOVER_INITIATE_SUCCESS_MESSAGE,
    RECOVER_TOKEN_EXPIRED_MESSAGE,
    SESSION_KEY,
)
from recoverkit.core.container import get_recovery_flow
from recoverkit.core.result import Failure, Success
from recoverkit.domain.errors import PasswordPolicyError, RecoveryError
from recoverkit.presentation.errors import ErrorDetail, problem_response
from recoverkit.presentation.errors.problem_details import ProblemDetails
from recoverkit.schemas import (
    RecoverCompleteRequest,
    RecoverCompleteResponse,
    RecoverFormResponse,
    RecoverRequest,
    RecoverResponse,
    RecoverTokenResponse,
)

recover_router = APIRouter(
    prefix="/recover",
    tags=["Recovery"],
)


@recover_router.get(
    "",
    response_model=RecoverFormResponse,
    summary="Describe recovery form",
)
async def get_recover_form() -> RecoverFormResponse:
    """Describe the fields POST /recover expects."""
    return RecoverFormResponse()


@recover_router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=RecoverResponse,
    summary="Request account recovery",
    description="Always returns the same response to prevent user enumeration.",
)
async def request_recovery(
    data: RecoverRequest,
    flow: RecoveryFlow = Depends(get_recovery_flow),
    settings: Settings = Depends(get_settings),
) -> RecoverResponse:
    """Request a recovery email.

    POST /recover -> 200 OK

    Args:
        data: Identifier and its confirmation.
        flow: Recovery flow (injected).
        settings: Application settings (injected).

    Returns:
        RecoverResponse, identical for known and unknown identifiers.
    """
    # Always the same response, whether or not the account exists
    await flow.initiate(InitiateRecovery(primary_id=data.primary_id))

    return RecoverResponse(
        message=RECOVER_INITIATE_SUCCESS_MESSAGE,
        location=settings.recover_ok_path,
    )


@recover_router.get(
    "/complete",
    response_model=RecoverTokenResponse,
    responses={400: {"description": "Expired or invalid token", "model": ProblemDetails}},
    summary="Check recovery token",
)
async def check_recovery_token(
    request: Request,
    token: str = Query(..., description="Recovery token from the email link"),
    flow: RecoveryFlow = Depends(get_recovery_flow),
    settings: Settings = Depends(get_settings),
) -> RecoverTokenResponse | JSONResponse:
    """Check a recovery token before asking for a new password.

    GET /recover/complete?token=... -> 200 OK | 400 Bad Request
    """
    result = await flow.verify(token)

    match result:
        case Success():
            return RecoverTokenResponse(token=token)
        case Failure(error=error):
            return _recovery_failure(request, error, settings)


@recover_router.post(
    "/complete",
    status_code=status.HTTP_200_OK,
    response_model=RecoverCompleteResponse,
    responses={
        400: {"description": "Expired or invalid token", "model": ProblemDetails},
        422: {"description": "Password rejected", "model": ProblemDetails},
    },
    summary="Complete account recovery",
    description="Set a new password. Signs the user in on success.",
)
async def complete_recovery(
    request: Request,
    data: RecoverCompleteRequest,
    flow: RecoveryFlow = Depends(get_recovery_flow),
    settings: Settings = Depends(get_settings),
) -> RecoverCompleteResponse | JSONResponse:
    """Redeem a recovery token.

    POST /recover/complete -> 200 OK | 400 Bad Request | 422 Unprocessable

    On success the session is bound to the recovered account.
    """
    command = CompleteRecovery(
        token=data.token,
        new_password=data.password,
        confirm_password=data.confirm_password,
    )

    result = await flow.complete(command)

    match result:
        case Success(value=completed):
            request.session[SESSION_KEY] = completed.primary_id
            return RecoverCompleteResponse(
                message=completed.message,
                location=settings.auth_login_ok_path,
            )
        case Failure(error=PasswordPolicyError() as error):
            return problem_response(
                request,
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                slug="validation-failed",
                title="Validation Failed",
                detail=error.message,
                errors=[
                    ErrorDetail(
                        field=error.field or "password",
                        code=error.code.value,
                        message=violation,
                    )
                    for violation in error.violations or (error.message,)
                ],
            )
        case Failure(error=error):
            return _recovery_failure(request, error, settings)


def _recovery_failure(
    request: Request,
    error: RecoveryError,
    settings: Settings,
) -> JSONResponse:
    """Render a token failure.

    Malformed and unknown tokens share one message and send the client to
    recover_ok_path. Expiry is told apart and points back at the recovery
    request form.
    """
    if error.is_expired:
        return problem_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            slug="recovery-expired",
            title="Recovery Expired",
            detail=RECOVER_TOKEN_EXPIRED_MESSAGE,
            location=f"{settings.mount_path}/recover",
        )

    return problem_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        slug="recovery-failed",
        title="Recovery Failed",
        detail=RECOVER_FAILED_MESSAGE,
        location=settings.recover_ok_path,
    )
