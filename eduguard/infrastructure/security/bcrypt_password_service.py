"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol with bcrypt. The cost factor comes from
``settings.bcrypt_rounds``; tests use the minimum (4) to stay fast.

Note:
    bcrypt only considers the first 72 bytes of its input. The password
    policy caps candidates at 128 characters, so long passphrases are
    pre-hashed with SHA-256 before bcrypt to keep every character
    significant.
"""

import base64
import hashlib

import bcrypt

BCRYPT_MAX_BYTES = 72
MIN_COST_FACTOR = 4
MAX_COST_FACTOR = 31


def _prepare(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) <= BCRYPT_MAX_BYTES:
        return encoded
    return base64.b64encode(hashlib.sha256(encoded).digest())


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service: PasswordHashingProtocol = get_password_service()
        password_hash = password_service.hash_password("Str0ng!Pass#2024")
        is_valid = password_service.verify_password("Str0ng!Pass#2024", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (4-31). Each +1 doubles the cost.

        Raises:
            ValueError: If cost_factor is outside bcrypt's accepted range.
        """
        if not MIN_COST_FACTOR <= cost_factor <= MAX_COST_FACTOR:
            msg = f"Cost factor must be between {MIN_COST_FACTOR} and {MAX_COST_FACTOR}"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Bcrypt hash string ($2b$<cost>$...), 60 characters.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(_prepare(password), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns False for a wrong password and for a malformed hash.
        """
        try:
            return bcrypt.checkpw(_prepare(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
