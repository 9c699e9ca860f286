"""
Data formatting utilities for M-PESA operations.
"""

import base64
import re
from datetime import datetime
from typing import Any

from ..constants import KENYA_COUNTRY_CODE, MASKED_TOKEN_LENGTH, TIMESTAMP_FORMAT

_SHORT_MOBILE_RE = re.compile(r'^7\d{8}$')


def normalize_phone_number(phone: Any) -> Any:
    """
    Normalize a phone number to the 2547XXXXXXXX format Daraja expects.

    Accepts strings or numbers such as ``0712345678``, ``+254712345678``,
    ``712345678`` or ``"0712 345 678"``. Input that matches none of the known
    shapes is returned with only whitespace and a leading ``+`` removed.

    Args:
        phone: Phone number to normalize

    Returns:
        Normalized phone number (falsy input is returned unchanged)
    """
    if not phone:
        return phone

    phone = re.sub(r'\s+', '', str(phone).strip())

    if phone.startswith('+'):
        phone = phone[1:]
    if phone.startswith('0'):
        phone = KENYA_COUNTRY_CODE + phone[1:]
    if not phone.startswith(KENYA_COUNTRY_CODE) and _SHORT_MOBILE_RE.match(phone):
        phone = KENYA_COUNTRY_CODE + phone

    return phone


def format_timestamp(now: datetime) -> str:
    """Format a datetime as the 14 character YYYYMMDDHHmmss Daraja timestamp."""
    return now.strftime(TIMESTAMP_FORMAT)


def encode_base64(value: str) -> str:
    return base64.b64encode(value.encode('utf-8')).decode('ascii')


def generate_password(shortcode: str, passkey: str, timestamp: str) -> str:
    """
    Generate the STK push password.

    Args:
        shortcode: Business short code
        passkey: Lipa na M-PESA passkey
        timestamp: Timestamp sent in the same request

    Returns:
        base64(shortcode + passkey + timestamp)
    """
    return encode_base64(f"{shortcode}{passkey}{timestamp}")


def basic_auth_header(consumer_key: str, consumer_secret: str) -> str:
    """Build the HTTP Basic Authorization value for the OAuth endpoint."""
    return f"Basic {encode_base64(f'{consumer_key}:{consumer_secret}')}"


def mask_token(token: str) -> str:
    # Only ever expose the first few characters of a token
    return f"{token[:MASKED_TOKEN_LENGTH]}..."
