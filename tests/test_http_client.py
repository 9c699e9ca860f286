from unittest.mock import patch

import pytest
import requests

from mpesa.exceptions import APIError, AuthenticationError
from mpesa.utils.http_client import HTTPClient
from tests.conftest import mock_http_response


@pytest.fixture
def client():
    return HTTPClient("https://sandbox.safaricom.co.ke/", timeout=5)


def test_builds_full_url_and_default_headers(client):
    with patch.object(client.session, 'request', return_value=mock_http_response({'ok': True})) as request:
        assert client.post('/mpesa/stkpush/v1/processrequest', data={'a': 1}) == {'ok': True}

    method, url = request.call_args.args
    assert method == 'POST'
    assert url == 'https://sandbox.safaricom.co.ke/mpesa/stkpush/v1/processrequest'
    kwargs = request.call_args.kwargs
    assert kwargs['json'] == {'a': 1}
    assert kwargs['timeout'] == 5
    assert kwargs['headers']['Content-Type'] == 'application/json'
    assert kwargs['headers']['Accept'] == 'application/json'


def test_get_passes_query_params(client):
    with patch.object(client.session, 'request', return_value=mock_http_response({})) as request:
        client.get('/oauth/v1/generate', params={'grant_type': 'client_credentials'})

    assert request.call_args.kwargs['params'] == {'grant_type': 'client_credentials'}


def test_http_error_carries_parsed_body(client):
    body = {'errorCode': '400.002.02', 'errorMessage': 'Bad Request - Invalid Amount'}
    with patch.object(client.session, 'request', return_value=mock_http_response(body, 400)):
        with pytest.raises(APIError) as exc_info:
            client.post('/mpesa/stkpush/v1/processrequest', data={})

    assert exc_info.value.error_code == 400
    assert exc_info.value.response_data == body
    assert exc_info.value.message == 'Bad Request - Invalid Amount'


def test_unauthorized_raises_authentication_error(client):
    with patch.object(client.session, 'request', return_value=mock_http_response({}, 401)):
        with pytest.raises(AuthenticationError):
            client.get('/oauth/v1/generate')


def test_error_body_falls_back_to_text(client):
    resp = mock_http_response(None, 500)
    resp.json.side_effect = ValueError("no json")
    resp.text = "Internal Server Error"
    with patch.object(client.session, 'request', return_value=resp):
        with pytest.raises(APIError) as exc_info:
            client.get('/oauth/v1/generate')

    assert exc_info.value.response_data == "Internal Server Error"


def test_connection_error_wrapped_without_retry(client):
    with patch.object(client.session, 'request', side_effect=requests.ConnectionError("refused")) as request:
        with pytest.raises(APIError) as exc_info:
            client.post('/mpesa/stkpush/v1/processrequest', data={})

    assert request.call_count == 1
    assert exc_info.value.error_code is None
    assert 'refused' in exc_info.value.response_data


def test_connection_error_retried_when_asked(client):
    responses = [requests.Timeout("slow"), mock_http_response({'ok': True})]
    with patch.object(client.session, 'request', side_effect=responses) as request:
        assert client.get('/oauth/v1/generate', retries=2) == {'ok': True}

    assert request.call_count == 2


def test_sanitize_headers_hides_credentials(client):
    sanitized = client._sanitize_headers({'Authorization': 'Bearer secret-token', 'Accept': 'x'})
    assert sanitized == {'Authorization': 'Bearer ***', 'Accept': 'x'}


def test_non_json_success_body_returned_as_text(client):
    resp = mock_http_response(None)
    resp.json.side_effect = ValueError("no json")
    resp.text = "<html>Service Unavailable</html>"
    with patch.object(client.session, 'request', return_value=resp):
        assert client.post('/mpesa/stkpush/v1/processrequest', data={}) == "<html>Service Unavailable</html>"


def test_empty_success_body_returned_as_none(client):
    resp = mock_http_response(None, 204)
    resp.json.side_effect = ValueError("no json")
    resp.text = ""
    with patch.object(client.session, 'request', return_value=resp):
        assert client.post('/mpesa/stkpush/v1/processrequest', data={}) is None
