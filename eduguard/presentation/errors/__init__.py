"""Error responses (RFC 7807 Problem Details)."""

from eduguard.presentation.errors.error_response_builder import (
    ErrorResponseBuilder,
    GateDenied,
)
from eduguard.presentation.errors.exception_handlers import register_exception_handlers
from eduguard.presentation.errors.problem_details import ErrorDetail, ProblemDetails

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "GateDenied",
    "ProblemDetails",
    "register_exception_handlers",
]
