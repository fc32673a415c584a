"""Opaque bearer token generation protocol."""

from typing import Protocol


class TokenGenerationProtocol(Protocol):
    """Creates raw bearer tokens and the digests stored for them.

    Usage:
        raw_token, token_hash = token_service.generate()
        # hand raw_token to the client, persist token_hash
    """

    def generate(self) -> tuple[str, str]:
        """Return (raw_token, token_hash)."""
        ...

    def digest(self, raw_token: str) -> str:
        """Digest used to look a presented token up."""
        ...
