"""Unit tests for ErrorResponseBuilder and ProblemDetails rendering."""

import json
from datetime import timedelta

import pytest
from fastapi import Request

from eduguard.core.enums import ErrorCode
from eduguard.core.errors import ConflictError, ValidationError
from eduguard.domain.enums import DenialKind, Gate
from eduguard.domain.errors import AccountLocked, InvalidCredentials
from eduguard.domain.value_objects import AuthorizationDecision
from eduguard.presentation.errors import ErrorResponseBuilder, GateDenied
from tests.conftest import NOW


def make_request(path: str = "/auth/login") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": path,
            "headers": [],
            "query_string": b"",
            "scheme": "http",
            "server": ("testserver", 80),
        }
    )


def body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.unit
class TestStatusMapping:
    """Stable code -> HTTP status."""

    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.INVALID_CREDENTIALS, 401),
            (ErrorCode.AUTHENTICATION_FAILED, 401),
            (ErrorCode.ACCOUNT_LOCKED, 403),
            (ErrorCode.GDPR_CONSENT_REQUIRED, 403),
            (ErrorCode.AUTHORIZATION_FAILED, 403),
            (ErrorCode.NOT_FOUND, 404),
            (ErrorCode.VALIDATION_ERROR, 422),
            (ErrorCode.DUPLICATE_RESOURCE, 422),
            (ErrorCode.PASSWORD_TOO_WEAK, 422),
            (ErrorCode.INTERNAL_ERROR, 500),
        ],
    )
    def test_status_for(self, code, status):
        assert ErrorResponseBuilder.status_for(code) == status

    def test_password_too_weak_reported_as_validation_error(self):
        assert (
            ErrorResponseBuilder.public_code(ErrorCode.PASSWORD_TOO_WEAK)
            is ErrorCode.VALIDATION_ERROR
        )

    @pytest.mark.parametrize(
        ("kind", "code"),
        [
            (DenialKind.GUARDIAN_CONSENT_REQUIRED, ErrorCode.GDPR_CONSENT_REQUIRED),
            (
                DenialKind.DATA_PROCESSING_CONSENT_REQUIRED,
                ErrorCode.GDPR_CONSENT_REQUIRED,
            ),
            (DenialKind.ROLE_NOT_ALLOWED, ErrorCode.AUTHORIZATION_FAILED),
            (DenialKind.ACCOUNT_LOCKED, ErrorCode.ACCOUNT_LOCKED),
        ],
    )
    def test_code_for_denial(self, kind, code):
        assert ErrorResponseBuilder.code_for_denial(kind) is code


@pytest.mark.unit
class TestFromDomainError:
    """Domain errors rendered as problem details."""

    def test_invalid_credentials_with_attempts_remaining(self):
        response = ErrorResponseBuilder.from_domain_error(
            InvalidCredentials(attempts_remaining=3), make_request()
        )

        assert response.status_code == 401
        data = body(response)
        assert data["code"] == "INVALID_CREDENTIALS"
        assert data["detail"] == "Invalid email or password"
        assert data["attempts_remaining"] == 3
        assert data["instance"] == "/auth/login"
        assert data["type"].endswith("/invalid-credentials")

    def test_unknown_email_omits_attempts_remaining(self):
        response = ErrorResponseBuilder.from_domain_error(
            InvalidCredentials(), make_request()
        )
        assert "attempts_remaining" not in body(response)

    def test_account_locked(self):
        locked_until = NOW + timedelta(minutes=15)
        response = ErrorResponseBuilder.from_domain_error(
            AccountLocked(locked_until=locked_until, minutes_remaining=15),
            make_request(),
        )

        assert response.status_code == 403
        data = body(response)
        assert data["code"] == "ACCOUNT_LOCKED"
        assert data["minutes_remaining"] == 15
        assert data["locked_until"] == locked_until.isoformat()

    def test_weak_password_has_field_error(self):
        response = ErrorResponseBuilder.from_domain_error(
            ValidationError(
                code=ErrorCode.PASSWORD_TOO_WEAK,
                message="Password must contain at least one number",
                field="password",
            ),
            make_request("/auth/register"),
        )

        assert response.status_code == 422
        data = body(response)
        assert data["code"] == "VALIDATION_ERROR"
        assert data["errors"] == [
            {
                "field": "password",
                "code": "PASSWORD_TOO_WEAK",
                "message": "Password must contain at least one number",
            }
        ]

    def test_duplicate_email(self):
        response = ErrorResponseBuilder.from_domain_error(
            ConflictError(
                code=ErrorCode.DUPLICATE_RESOURCE,
                message="Email already registered",
                resource_type="Account",
                conflicting_field="email",
            ),
            make_request("/auth/register"),
        )

        assert response.status_code == 422
        assert body(response)["errors"][0]["field"] == "email"


@pytest.mark.unit
class TestExceptionForDecision:
    """Denied decisions become GateDenied exceptions."""

    def test_role_denial(self):
        decision = AuthorizationDecision.deny(
            Gate.ROLE,
            DenialKind.ROLE_NOT_ALLOWED,
            "This action requires one of the following roles: admin",
            allowed_roles=["admin"],
        )

        exc = ErrorResponseBuilder.exception_for_decision(decision)

        assert isinstance(exc, GateDenied)
        assert exc.status_code == 403
        assert exc.code is ErrorCode.AUTHORIZATION_FAILED
        assert exc.extensions == {"allowed_roles": ["admin"]}

    def test_consent_denial(self):
        decision = AuthorizationDecision.deny(
            Gate.CONSENT,
            DenialKind.DATA_PROCESSING_CONSENT_REQUIRED,
            "Data processing consent required",
        )

        exc = ErrorResponseBuilder.exception_for_decision(decision)

        assert exc.status_code == 403
        assert exc.code is ErrorCode.GDPR_CONSENT_REQUIRED
        assert exc.detail == "Data processing consent required"
        assert exc.extensions == {}
