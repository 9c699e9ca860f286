"""
Constants and enums for M-PESA STK push operations.
"""

from enum import Enum


class Environment(str, Enum):
    """Daraja deployment environments."""
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class TokenFailure(str, Enum):
    """Reasons an access token could not be obtained."""
    NOT_CONFIGURED = "NOT_CONFIGURED"
    GATEWAY_ERROR = "GATEWAY_ERROR"


class PaymentOutcome(str, Enum):
    """Terminal outcomes of an STK push attempt."""
    SUCCESS = "SUCCESS"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    GATEWAY_ERROR = "GATEWAY_ERROR"
    REJECTED = "REJECTED"
    SERVER_ERROR = "SERVER_ERROR"


# HTTP status returned for each outcome
OUTCOME_STATUS_CODES = {
    PaymentOutcome.SUCCESS: 200,
    PaymentOutcome.INVALID_REQUEST: 400,
    PaymentOutcome.NOT_CONFIGURED: 500,
    PaymentOutcome.GATEWAY_ERROR: 502,
    PaymentOutcome.REJECTED: 400,
    PaymentOutcome.SERVER_ERROR: 500,
}


# API Endpoints
class APIEndpoints:
    """Daraja API endpoints."""
    GENERATE_TOKEN = "/oauth/v1/generate"
    STK_PUSH = "/mpesa/stkpush/v1/processrequest"


BASE_URLS = {
    Environment.SANDBOX: "https://sandbox.safaricom.co.ke",
    Environment.PRODUCTION: "https://api.safaricom.co.ke",
}

# STK push payload settings
TRANSACTION_TYPE = "CustomerPayBillOnline"
ACCOUNT_REFERENCE = "MPESA_PAYMENT"
DEFAULT_CUSTOMER_NAME = "customer"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Gateway response codes
RESPONSE_CODE_ACCEPTED = "0"
INVALID_TOKEN_ERROR_CODE = "404.001.03"
INVALID_TOKEN_MESSAGE = "Invalid Access Token"

# Token settings
MOCK_ACCESS_TOKEN = "mock-access-token"
MASKED_TOKEN_LENGTH = 6

# Phone number settings
KENYA_COUNTRY_CODE = "254"

# Default settings
DEFAULT_TIMEOUT = 30  # seconds
MAX_SUBMIT_ATTEMPTS = 2

# Sample callback values used by the simulate endpoint
SAMPLE_CALLBACK_AMOUNT = 10
SAMPLE_CALLBACK_PHONE = "254708374149"
SAMPLE_RECEIPT_NUMBER = "ABC123XYZ"
