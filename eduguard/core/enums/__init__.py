"""Core enums package.

Usage:
    from eduguard.core.enums import ErrorCode, Environment
"""

from eduguard.core.enums.environment import Environment
from eduguard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
