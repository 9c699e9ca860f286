import base64
from datetime import datetime
from unittest.mock import patch

import pytest

from mpesa.exceptions import APIError
from mpesa.schemas import PaymentRequest
from mpesa.services.stk_service import StkPushService, build_stk_payload
from tests.conftest import accepted_response, invalid_token_response

NOW = datetime(2024, 1, 31, 14, 5, 9)


def test_payload_fields(mpesa_config):
    payload = build_stk_payload(
        PaymentRequest(phone="0712345678", amount=10, name="Jane"),
        "tok", mpesa_config, NOW
    )

    assert payload == {
        'BusinessShortCode': '174379',
        'Password': base64.b64encode(b'174379test_passkey20240131140509').decode(),
        'Timestamp': '20240131140509',
        'TransactionType': 'CustomerPayBillOnline',
        'Amount': 10,
        'PartyA': '254712345678',
        'PartyB': '174379',
        'PhoneNumber': '254712345678',
        'CallBackURL': 'https://example.com/mpesa/callback',
        'AccountReference': 'MPESA_PAYMENT',
        'TransactionDesc': 'Payment by Jane',
    }


def test_payload_defaults_customer_name(mpesa_config):
    payload = build_stk_payload(PaymentRequest(phone="712345678", amount="5"), "tok", mpesa_config, NOW)

    assert payload['TransactionDesc'] == 'Payment by customer'
    assert payload['Amount'] == "5"


def test_payload_is_deterministic(mpesa_config):
    request = PaymentRequest(phone="+254712345678", amount=1)
    assert build_stk_payload(request, "a", mpesa_config, NOW) == build_stk_payload(request, "b", mpesa_config, NOW)


def test_submit_sends_bearer_token(mpesa_config):
    service = StkPushService(mpesa_config)
    payload = {'Amount': 1}
    with patch.object(service.http_client.session, 'request', return_value=accepted_response()) as request:
        response = service.submit(payload, 'tok123')

    assert response['ResponseCode'] == '0'
    method, url = request.call_args.args
    assert method == 'POST'
    assert url == 'https://sandbox.safaricom.co.ke/mpesa/stkpush/v1/processrequest'
    assert request.call_args.kwargs['headers']['Authorization'] == 'Bearer tok123'
    assert request.call_args.kwargs['json'] == payload


def test_submit_raises_api_error(mpesa_config):
    service = StkPushService(mpesa_config)
    with patch.object(service.http_client.session, 'request', return_value=invalid_token_response()):
        with pytest.raises(APIError) as exc_info:
            service.submit({}, 'expired')

    assert exc_info.value.response_data['errorCode'] == '404.001.03'
