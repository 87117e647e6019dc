"""RFC 9457 error responses."""

from recoverkit.presentation.errors.exception_handlers import (
    problem_response,
    register_exception_handlers,
)
from recoverkit.presentation.errors.problem_details import ErrorDetail, ProblemDetails

__all__ = [
    "ErrorDetail",
    "ProblemDetails",
    "problem_response",
    "register_exception_handlers",
]
