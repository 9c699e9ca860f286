"""
Payment manager for the STK push workflow.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from django.utils import timezone

from ..config import MpesaConfig, get_config
from ..constants import PaymentOutcome, RESPONSE_CODE_ACCEPTED
from ..exceptions import APIError, ValidationError
from ..schemas import PaymentRequest, PaymentResult
from ..services.auth_service import AuthService
from ..services.stk_service import StkPushService, build_stk_payload
from ..signals import stk_push_completed
from ..utils.formatters import mask_token
from ..utils.http_client import HTTPClient
from ..utils.retry import RetryPolicy, TOKEN_REFRESH_POLICY

logger = logging.getLogger(__name__)


class PaymentManager:
    """
    High-level manager for STK push payments.

    Sequences token acquisition, payload construction and submission.
    A submission rejected for an invalid access token is retried once with
    a freshly acquired token; every other failure is terminal.
    """

    def __init__(
        self,
        config: Optional[MpesaConfig] = None,
        auth_service: Optional[AuthService] = None,
        stk_service: Optional[StkPushService] = None,
        retry_policy: Optional[RetryPolicy] = None
    ):
        self.config = config or get_config()
        # Services built here share one HTTP session, closed by close()
        self._http_client = None
        if auth_service is None or stk_service is None:
            self._http_client = HTTPClient(self.config.api_base_url, timeout=self.config.timeout)
        self.auth_service = auth_service or AuthService(self.config, http_client=self._http_client)
        self.stk_service = stk_service or StkPushService(self.config, http_client=self._http_client)
        self.retry_policy = retry_policy or TOKEN_REFRESH_POLICY

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Close the HTTP session opened by this manager, if any."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def initiate_payment(self, request: PaymentRequest, now: Optional[datetime] = None) -> PaymentResult:
        """
        Send an STK push to the customer's phone.

        Args:
            request: Payment request from the client
            now: Time used for the request timestamp (defaults to now)

        Returns:
            PaymentResult describing the terminal outcome. Errors are mapped
            to a result rather than raised, including errors raised by
            stk_push_completed receivers.
        """
        try:
            result = self._initiate(request, now or timezone.now())
        except Exception as e:
            logger.exception(f"M-PESA Error: {str(e)}")
            result = PaymentResult(
                PaymentOutcome.SERVER_ERROR,
                "Server error while processing payment."
            )

        responses = stk_push_completed.send_robust(sender=self.__class__, request=request, result=result)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(f"stk_push_completed receiver {receiver} failed: {str(response)}")
        return result

    def _initiate(self, request: PaymentRequest, now: datetime) -> PaymentResult:
        try:
            request.validate()
        except ValidationError as e:
            return PaymentResult(PaymentOutcome.INVALID_REQUEST, e.message)

        if self.config.mock:
            logger.info("MPESA_MOCK enabled - returning simulated STK success (no external call)")
            return PaymentResult(PaymentOutcome.SUCCESS, "STK Push sent to phone. (mock)")

        token_result = self.auth_service.acquire_token()
        if not token_result.ok:
            return PaymentResult(
                PaymentOutcome.NOT_CONFIGURED,
                "Server not configured to fetch access token. Check environment variables."
            )
        logger.debug(f"Access token (masked): {mask_token(token_result.token)}")

        payload = build_stk_payload(request, token_result.token, self.config, now)

        token = token_result.token
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self.stk_service.submit(payload, token)
                break
            except APIError as e:
                details = e.response_data or e.message
                if not self.retry_policy.should_retry(e, attempt):
                    if attempt == 1:
                        logger.error(f"STK request error: {details}")
                        message = "STK request failed"
                    else:
                        logger.error(f"STK retry failed: {details}")
                        message = "STK request failed after token refresh"
                    return PaymentResult(PaymentOutcome.GATEWAY_ERROR, message, details=details)

            logger.warning(
                "Invalid access token detected from M-PESA, "
                "attempting to refresh token and retry STK"
            )
            token_result = self.auth_service.acquire_token()
            if not token_result.ok:
                return PaymentResult(
                    PaymentOutcome.GATEWAY_ERROR,
                    "Unable to refresh access token. Check credentials."
                )
            token = token_result.token

        return self._to_result(response)

    def _to_result(self, response: Dict[str, Any]) -> PaymentResult:
        if isinstance(response, dict) and response.get('ResponseCode') == RESPONSE_CODE_ACCEPTED:
            logger.info(f"STK Push accepted: {response.get('CheckoutRequestID')}")
            return PaymentResult(
                PaymentOutcome.SUCCESS,
                "STK Push sent to phone.",
                response=response
            )

        logger.warning(f"STK Push rejected by M-PESA: {response}")
        return PaymentResult(
            PaymentOutcome.REJECTED,
            "Failed to send STK Push.",
            details=response or None
        )
