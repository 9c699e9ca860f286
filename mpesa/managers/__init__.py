"""
Manager modules for high-level payment orchestration.
"""

from .payment_manager import PaymentManager

__all__ = [
    'PaymentManager',
]
