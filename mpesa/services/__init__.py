"""
Service modules for M-PESA operations.
"""

from .auth_service import AuthService
from .stk_service import StkPushService, build_stk_payload

__all__ = [
    'AuthService',
    'StkPushService',
    'build_stk_payload',
]
