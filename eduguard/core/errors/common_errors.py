"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (never counted against lockout)
- NotFoundError: Resource not found
- ConflictError: Uniqueness conflicts (duplicate email or handle)
- AuthenticationError: Authentication failures
- AuthorizationError: Consent and role failures

Usage:
    from eduguard.core.errors import ValidationError
    from eduguard.core.enums import ErrorCode
    from eduguard.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.PASSWORD_TOO_WEAK,
        message="Password cannot contain sequential characters",
        field="password",
    ))
"""

from dataclasses import dataclass

from eduguard.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Account, StudentProfile, ...).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate email, duplicate handle).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, locked account, bad token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (missing consent, role not allowed).

    Attributes:
        required_roles: Roles the endpoint accepts, when a role check failed.
    """

    required_roles: tuple[str, ...] | None = None
