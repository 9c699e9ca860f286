"""
Sample Daraja callback payloads for local testing.
"""

from typing import Any, Dict, Optional

from ..constants import (
    SAMPLE_CALLBACK_AMOUNT,
    SAMPLE_CALLBACK_PHONE,
    SAMPLE_RECEIPT_NUMBER,
)


def build_sample_callback(amount: Optional[Any] = None, phone: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build a payload shaped like a successful Daraja STK callback.

    Args:
        amount: Amount to echo (defaults to 10)
        phone: Phone number to echo (defaults to 254708374149)

    Returns:
        Dictionary with the ``Body.stkCallback`` structure Daraja posts
    """
    return {
        'Body': {
            'stkCallback': {
                'MerchantRequestID': '12345',
                'CheckoutRequestID': 'ABCDE',
                'ResultCode': 0,
                'ResultDesc': 'The service request is processed successfully.',
                'CallbackMetadata': {
                    'Item': [
                        {'Name': 'Amount', 'Value': amount or SAMPLE_CALLBACK_AMOUNT},
                        {'Name': 'MpesaReceiptNumber', 'Value': SAMPLE_RECEIPT_NUMBER},
                        {'Name': 'PhoneNumber', 'Value': phone or SAMPLE_CALLBACK_PHONE},
                    ]
                },
            }
        }
    }
