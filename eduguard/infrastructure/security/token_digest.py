"""Opaque bearer token helpers.

Raw tokens are URL-safe random strings handed to the client once; storage
only ever sees their SHA-256 hex digest.
"""

import hashlib
import secrets

TOKEN_BYTES = 32


def generate_token() -> str:
    """Create a new raw bearer token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def digest_token(raw_token: str) -> str:
    """Hex SHA-256 digest used as the lookup key."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class OpaqueTokenService:
    """TokenGenerationProtocol implementation over generate_token/digest_token."""

    def generate(self) -> tuple[str, str]:
        raw_token = generate_token()
        return raw_token, digest_token(raw_token)

    def digest(self, raw_token: str) -> str:
        return digest_token(raw_token)
