"""
REST API views for STK push requests and M-PESA callbacks.
"""

import json
import logging
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from .config import get_config
from .managers.payment_manager import PaymentManager
from .schemas import PaymentRequest
from .services.auth_service import AuthService
from .signals import callback_received
from .utils.callbacks import build_sample_callback
from .utils.formatters import mask_token
from .constants import MOCK_ACCESS_TOKEN

logger = logging.getLogger(__name__)


def _json_body(request):
    """Parse a JSON request body; anything unparseable becomes {}."""
    try:
        data = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        logger.warning("Ignoring request body that is not valid JSON")
        return {}
    return data if isinstance(data, dict) else {}


@csrf_exempt
@require_POST
def pay(request):
    """
    Initiate an STK push to the customer's phone.
    """
    payment_request = PaymentRequest.from_dict(_json_body(request))
    with PaymentManager(get_config()) as manager:
        result = manager.initiate_payment(payment_request)
    return JsonResponse(result.to_dict(), status=result.status_code)


@require_GET
def token(request):
    """
    Fetch an access token and return it masked, to check credentials.
    """
    config = get_config()
    if config.mock:
        return JsonResponse({
            'success': True,
            'message': 'Fetched access token (mock)',
            'token': mask_token(MOCK_ACCESS_TOKEN),
        })

    auth_service = AuthService(config)
    try:
        masked = auth_service.get_masked_token()
    finally:
        auth_service.close()
    if masked is None:
        return JsonResponse(
            {'success': False, 'message': 'Unable to fetch access token. Check credentials.'},
            status=502
        )
    return JsonResponse({'success': True, 'message': 'Fetched access token', 'token': masked})


@csrf_exempt
@require_POST
def mpesa_callback(request):
    """
    Receive Daraja STK push result callbacks.
    The payload is logged and broadcast; Daraja always gets a 200.
    """
    data = _json_body(request)
    logger.info(f"Received M-PESA callback: {data}")
    callback_received.send(sender=mpesa_callback, payload=data)
    return JsonResponse({'success': True})


@csrf_exempt
@require_POST
def simulate_callback(request):
    """
    Return a sample Daraja callback echoing the given amount and phone.
    """
    data = _json_body(request)
    sample = build_sample_callback(amount=data.get('amount'), phone=data.get('phone'))
    logger.info(f"Simulated callback generated: {sample}")
    return JsonResponse({'success': True, 'callback': sample})
