"""Authorization decision value object.

Every gate returns one of these instead of raising, so a denial is always an
explicit value the caller must inspect. Decisions are ephemeral and never
persisted; the events published alongside them form the audit trail.
"""

from dataclasses import dataclass, field
from typing import Any

from eduguard.domain.enums import DenialKind, Gate


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationDecision:
    """Outcome of a single gate.

    Attributes:
        allowed: True if the gate let the request through.
        gate: Gate that produced the decision.
        kind: Machine-readable denial reason (None when allowed).
        reason: Human-readable denial message (None when allowed).
        metadata: Structured context (allowed_roles, minutes_remaining, ...).

    Example:
        >>> decision = AuthorizationDecision.deny(
        ...     Gate.ROLE,
        ...     DenialKind.ROLE_NOT_ALLOWED,
        ...     "This action requires one of the following roles: admin",
        ...     allowed_roles=["admin"],
        ... )
        >>> decision.denied
        True
    """

    allowed: bool
    gate: Gate
    kind: DenialKind | None = None
    reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def denied(self) -> bool:
        """Inverse of allowed."""
        return not self.allowed

    @classmethod
    def allow(cls, gate: Gate) -> "AuthorizationDecision":
        """Build an allow decision for ``gate``."""
        return cls(allowed=True, gate=gate)

    @classmethod
    def deny(
        cls, gate: Gate, kind: DenialKind, reason: str, **metadata: Any
    ) -> "AuthorizationDecision":
        """Build a deny decision carrying kind, message and metadata."""
        return cls(
            allowed=False,
            gate=gate,
            kind=kind,
            reason=reason,
            metadata=dict(metadata),
        )
