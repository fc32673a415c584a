"""RFC 7807 Problem Details for HTTP APIs.

RFC 7807: https://tools.ietf.org/html/rfc7807

Every error body carries the stable machine-readable ``code`` clients switch
on (INVALID_CREDENTIALS, ACCOUNT_LOCKED, GDPR_CONSENT_REQUIRED, ...) next to
the standard members. Lockout and role denials add their context as
extension members.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> error = ErrorDetail(
        ...     field="password",
        ...     code="PASSWORD_TOO_WEAK",
        ...     message="Password cannot contain sequential characters",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details with access-control extensions.

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://eduguard.local/errors/account-locked",
        ...     title="Account Locked",
        ...     status=403,
        ...     code="ACCOUNT_LOCKED",
        ...     detail="Account is temporarily locked ... Try again in 15 minutes.",
        ...     instance="/auth/login",
        ...     minutes_remaining=15,
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://eduguard.local/errors/validation-error"],
    )
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code", examples=[403])
    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=["GDPR_CONSENT_REQUIRED"],
    )
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/grades"],
    )
    errors: list[ErrorDetail] | None = Field(
        None, description="List of field-specific errors"
    )
    attempts_remaining: int | None = Field(
        None, description="Failed logins left before lockout"
    )
    locked_until: str | None = Field(None, description="End of the lockout (ISO 8601)")
    minutes_remaining: int | None = Field(
        None, description="Whole minutes until unlock, rounded up"
    )
    allowed_roles: list[str] | None = Field(
        None, description="Roles the endpoint accepts"
    )
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
