"""Application services: gates and the access-control facade."""

from eduguard.application.services.access_control_service import AccessControlService
from eduguard.application.services.consent_gate import ConsentGate
from eduguard.application.services.role_gate import RoleGate

__all__ = ["AccessControlService", "ConsentGate", "RoleGate"]
