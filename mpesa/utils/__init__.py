"""
Utility modules for M-PESA operations.
"""

from .http_client import HTTPClient
from .formatters import (
    normalize_phone_number,
    format_timestamp,
    generate_password,
    basic_auth_header,
    mask_token,
)
from .retry import RetryPolicy, is_invalid_token_error
from .callbacks import build_sample_callback

__all__ = [
    'HTTPClient',
    'normalize_phone_number',
    'format_timestamp',
    'generate_password',
    'basic_auth_header',
    'mask_token',
    'RetryPolicy',
    'is_invalid_token_error',
    'build_sample_callback',
]
