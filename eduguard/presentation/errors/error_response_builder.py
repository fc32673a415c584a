"""Error response builder.

Maps domain errors and gate denials to an HTTP status and a stable error
code, and renders them as ProblemDetails.

    INVALID_CREDENTIALS     401
    AUTHENTICATION_FAILED   401
    ACCOUNT_LOCKED          403
    GDPR_CONSENT_REQUIRED   403
    AUTHORIZATION_FAILED    403
    NOT_FOUND               404
    VALIDATION_ERROR        422
    DUPLICATE_RESOURCE      422
    INTERNAL_ERROR          500

Exports:
    ErrorResponseBuilder
    GateDenied
"""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from eduguard.core.config import settings
from eduguard.core.enums import ErrorCode
from eduguard.core.errors import DomainError
from eduguard.domain.enums import DenialKind
from eduguard.domain.errors import AccountLocked, InvalidCredentials
from eduguard.domain.value_objects import AuthorizationDecision
from eduguard.presentation.errors.problem_details import ErrorDetail, ProblemDetails

# Stable code -> (HTTP status, title)
_CODE_INFO: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid Credentials"),
    ErrorCode.AUTHENTICATION_FAILED: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
    ),
    ErrorCode.ACCOUNT_LOCKED: (status.HTTP_403_FORBIDDEN, "Account Locked"),
    ErrorCode.GDPR_CONSENT_REQUIRED: (status.HTTP_403_FORBIDDEN, "Consent Required"),
    ErrorCode.AUTHORIZATION_FAILED: (status.HTTP_403_FORBIDDEN, "Access Denied"),
    ErrorCode.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ErrorCode.VALIDATION_ERROR: (422, "Validation Failed"),
    ErrorCode.DUPLICATE_RESOURCE: (422, "Resource Conflict"),
    ErrorCode.INTERNAL_ERROR: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
    ),
}

# Error codes reported to clients under a broader stable code
_PUBLIC_CODE: dict[ErrorCode, ErrorCode] = {
    ErrorCode.PASSWORD_TOO_WEAK: ErrorCode.VALIDATION_ERROR,
    ErrorCode.CONSENT_ALREADY_REVOKED: ErrorCode.VALIDATION_ERROR,
}

_DENIAL_CODE: dict[DenialKind, ErrorCode] = {
    DenialKind.INVALID_CREDENTIALS: ErrorCode.INVALID_CREDENTIALS,
    DenialKind.ACCOUNT_LOCKED: ErrorCode.ACCOUNT_LOCKED,
    DenialKind.GUARDIAN_CONSENT_REQUIRED: ErrorCode.GDPR_CONSENT_REQUIRED,
    DenialKind.DATA_PROCESSING_CONSENT_REQUIRED: ErrorCode.GDPR_CONSENT_REQUIRED,
    DenialKind.ROLE_NOT_ALLOWED: ErrorCode.AUTHORIZATION_FAILED,
    DenialKind.RECORD_NOT_ACCESSIBLE: ErrorCode.AUTHORIZATION_FAILED,
}


class GateDenied(HTTPException):
    """HTTPException carrying a stable error code and extension members.

    Raised by the gate dependencies; rendered by the HTTPException handler.
    """

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        headers: dict[str, str] | None = None,
        **extensions: Any,
    ) -> None:
        status_code, _ = _CODE_INFO[code]
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.extensions = extensions


class ErrorResponseBuilder:
    """Build ProblemDetails responses from domain errors and decisions."""

    @staticmethod
    def public_code(code: ErrorCode) -> ErrorCode:
        """Stable code reported for an internal error code."""
        return _PUBLIC_CODE.get(code, code)

    @staticmethod
    def status_for(code: ErrorCode) -> int:
        """HTTP status for a (public) error code."""
        public = ErrorResponseBuilder.public_code(code)
        return _CODE_INFO.get(public, _CODE_INFO[ErrorCode.INTERNAL_ERROR])[0]

    @staticmethod
    def code_for_denial(kind: DenialKind) -> ErrorCode:
        """Stable code for a gate denial kind."""
        return _DENIAL_CODE[kind]

    @staticmethod
    def build(
        code: ErrorCode,
        detail: str,
        request: Request,
        errors: list[ErrorDetail] | None = None,
        **extensions: Any,
    ) -> ProblemDetails:
        """Assemble ProblemDetails for a stable code."""
        public = ErrorResponseBuilder.public_code(code)
        status_code, title = _CODE_INFO.get(public, _CODE_INFO[ErrorCode.INTERNAL_ERROR])
        slug = public.value.lower().replace("_", "-")
        return ProblemDetails(
            type=f"{settings.problem_type_base_url}/{slug}",
            title=title,
            status=status_code,
            code=public.value,
            detail=detail,
            instance=str(request.url.path),
            errors=errors,
            trace_id=getattr(request.state, "trace_id", None),
            **extensions,
        )

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a Failure's DomainError into a JSON response.

        Example:
            >>> match result:
            ...     case Failure(error=error):
            ...         return ErrorResponseBuilder.from_domain_error(error, request)
        """
        extensions: dict[str, Any] = {}
        errors: list[ErrorDetail] | None = None

        if isinstance(error, InvalidCredentials):
            extensions["attempts_remaining"] = error.attempts_remaining
        elif isinstance(error, AccountLocked):
            extensions["locked_until"] = error.locked_until.isoformat()
            extensions["minutes_remaining"] = error.minutes_remaining

        field = getattr(error, "field", None) or getattr(error, "conflicting_field", None)
        if field:
            errors = [
                ErrorDetail(field=field, code=error.code.value, message=error.message)
            ]

        problem = ErrorResponseBuilder.build(
            error.code, error.message, request, errors=errors, **extensions
        )
        return JSONResponse(
            status_code=problem.status,
            content=problem.model_dump(exclude_none=True),
        )

    @staticmethod
    def exception_for_decision(decision: AuthorizationDecision) -> GateDenied:
        """GateDenied for a denied decision (raise it from a dependency)."""
        assert decision.kind is not None and decision.reason is not None
        extensions: dict[str, Any] = {}
        if "allowed_roles" in decision.metadata:
            extensions["allowed_roles"] = list(decision.metadata["allowed_roles"])
        return GateDenied(
            ErrorResponseBuilder.code_for_denial(decision.kind),
            decision.reason,
            **extensions,
        )
