import json
from unittest.mock import Mock

import pytest

from mpesa.config import MpesaConfig, get_config
from mpesa.constants import Environment


@pytest.fixture(autouse=True)
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def mpesa_config():
    return MpesaConfig(
        consumer_key='test_consumer_key',
        consumer_secret='test_consumer_secret',
        business_shortcode='174379',
        passkey='test_passkey',
        callback_url='https://example.com/mpesa/callback',
        environment=Environment.SANDBOX,
    )


def mock_http_response(json_data, status_code=200):
    """Return a mock requests.Response whose .json() returns json_data."""
    resp = Mock()
    resp.ok = 200 <= status_code < 400
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.text = json.dumps(json_data)
    return resp


def token_response(token='daraja_tok_abc123'):
    return mock_http_response({'access_token': token, 'expires_in': '3599'})


def accepted_response():
    return mock_http_response({
        'MerchantRequestID': '29115-34620561-1',
        'CheckoutRequestID': 'ws_CO_191220191020363925',
        'ResponseCode': '0',
        'ResponseDescription': 'Success. Request accepted for processing',
        'CustomerMessage': 'Success. Request accepted for processing',
    })


def invalid_token_response():
    return mock_http_response({
        'requestId': '11728-2929992-1',
        'errorCode': '404.001.03',
        'errorMessage': 'Invalid Access Token',
    }, status_code=404)
