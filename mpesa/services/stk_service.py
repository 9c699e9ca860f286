"""
STK push service for M-PESA Lipa na M-PESA Online payments.
Builds and submits STK push requests.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..config import MpesaConfig, get_config
from ..constants import (
    ACCOUNT_REFERENCE,
    APIEndpoints,
    DEFAULT_CUSTOMER_NAME,
    TRANSACTION_TYPE,
)
from ..schemas import PaymentRequest
from ..utils.formatters import format_timestamp, generate_password, normalize_phone_number
from ..utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


def build_stk_payload(
    request: PaymentRequest,
    token: Optional[str],
    config: MpesaConfig,
    now: datetime
) -> Dict[str, Any]:
    """
    Build the Daraja STK push request body.

    Pure function of its inputs. The token travels in the Authorization
    header and is not part of the body.

    Args:
        request: Payment request from the client
        token: Access token the payload will be submitted with
        config: M-PESA configuration
        now: Time used for the timestamp and password

    Returns:
        Dictionary with Daraja's field names
    """
    timestamp = format_timestamp(now)
    phone = normalize_phone_number(request.phone)

    return {
        'BusinessShortCode': config.business_shortcode,
        'Password': generate_password(config.business_shortcode, config.passkey, timestamp),
        'Timestamp': timestamp,
        'TransactionType': TRANSACTION_TYPE,
        'Amount': request.amount,
        'PartyA': phone,
        'PartyB': config.business_shortcode,
        'PhoneNumber': phone,
        'CallBackURL': config.callback_url,
        'AccountReference': ACCOUNT_REFERENCE,
        'TransactionDesc': f"Payment by {request.name or DEFAULT_CUSTOMER_NAME}",
    }


class StkPushService:
    """
    Service for submitting STK push requests to Daraja.
    """

    def __init__(self, config: Optional[MpesaConfig] = None, http_client: Optional[HTTPClient] = None):
        self.config = config or get_config()
        self.http_client = http_client or HTTPClient(self.config.api_base_url, timeout=self.config.timeout)

    def submit(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        """
        Submit an STK push request.

        Args:
            payload: Body built by build_stk_payload
            token: Bearer access token

        Returns:
            Daraja response body, e.g. ResponseCode, CustomerMessage,
            CheckoutRequestID, MerchantRequestID

        Raises:
            APIError: If the request fails or Daraja returns an HTTP error
        """
        headers = {
            'Authorization': f'Bearer {token}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

        response = self.http_client.post(
            endpoint=APIEndpoints.STK_PUSH,
            data=payload,
            headers=headers
        )

        logger.info("STK Push response received")
        return response
