"""Domain value objects."""

from eduguard.domain.value_objects.authorization_decision import AuthorizationDecision
from eduguard.domain.value_objects.scope_options import DEFAULT_SCOPE, ScopeOptions

__all__ = ["DEFAULT_SCOPE", "AuthorizationDecision", "ScopeOptions"]
