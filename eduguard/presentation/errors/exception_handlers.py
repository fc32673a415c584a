"""Global exception handlers for FastAPI application.

Handlers:
    http_exception_handler: HTTPException (including GateDenied) -> ProblemDetails
    validation_exception_handler: RequestValidationError -> 422 VALIDATION_ERROR
    access_denied_handler: AccessDenied from scope_or_fail -> 403 AUTHORIZATION_FAILED
    profile_missing_handler: ProfileMissingError -> 500 INTERNAL_ERROR
    generic_exception_handler: anything else -> 500 INTERNAL_ERROR

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eduguard.core.container import get_logger
from eduguard.core.enums import ErrorCode
from eduguard.domain.errors import AccessDenied, ProfileMissingError
from eduguard.presentation.errors.error_response_builder import (
    ErrorResponseBuilder,
    GateDenied,
)
from eduguard.presentation.errors.problem_details import ErrorDetail

_STATUS_CODE: dict[int, ErrorCode] = {
    401: ErrorCode.AUTHENTICATION_FAILED,
    403: ErrorCode.AUTHORIZATION_FAILED,
    404: ErrorCode.NOT_FOUND,
    422: ErrorCode.VALIDATION_ERROR,
}

INTERNAL_ERROR_DETAIL = (
    "An unexpected error occurred. Please contact support with the trace ID."
)


def _respond(
    problem_status: int,
    content: dict[str, object],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=problem_status, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to a ProblemDetails response.

    GateDenied keeps its stable code and extensions; other HTTPExceptions
    are classified by status code.
    """
    assert isinstance(exc, HTTPException)

    if isinstance(exc, GateDenied):
        code = exc.code
        extensions = exc.extensions
    else:
        code = _STATUS_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
        extensions = {}

    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    problem = ErrorResponseBuilder.build(code, detail, request, **extensions)
    return _respond(
        exc.status_code,
        problem.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert RequestValidationError to 422 VALIDATION_ERROR with field errors.

    Input validation happens before the access-control core and never
    counts towards a lockout.
    """
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        # Skip "body" prefix if present
        field_parts = [str(p) for p in loc if p != "body"]
        field_errors.append(
            ErrorDetail(
                field=".".join(field_parts) if field_parts else "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    problem = ErrorResponseBuilder.build(
        ErrorCode.VALIDATION_ERROR,
        "Request validation failed. Check 'errors' for details.",
        request,
        errors=field_errors or None,
    )
    return _respond(problem.status, problem.model_dump(exclude_none=True))


async def access_denied_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert AccessDenied to 403 AUTHORIZATION_FAILED."""
    assert isinstance(exc, AccessDenied)
    problem = ErrorResponseBuilder.build(
        ErrorCode.AUTHORIZATION_FAILED, exc.message, request
    )
    return _respond(problem.status, problem.model_dump(exclude_none=True))


async def profile_missing_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert ProfileMissingError to 500; it is a data fault, not a denial."""
    assert isinstance(exc, ProfileMissingError)
    get_logger().error(
        "student_profile_missing",
        account_id=str(exc.account_id),
        request_path=request.url.path,
    )
    problem = ErrorResponseBuilder.build(
        ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_DETAIL, request
    )
    return _respond(problem.status, problem.model_dump(exclude_none=True))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions without leaking internals."""
    get_logger().error(
        "unhandled_exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )
    problem = ErrorResponseBuilder.build(
        ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_DETAIL, request
    )
    return _respond(problem.status, problem.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AccessDenied, access_denied_handler)
    app.add_exception_handler(ProfileMissingError, profile_missing_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
