"""
Authentication service for the Daraja API.
Handles access token generation.
"""

import logging
from typing import Optional

from ..config import MpesaConfig, get_config
from ..constants import APIEndpoints, MOCK_ACCESS_TOKEN, TokenFailure
from ..exceptions import APIError
from ..schemas import TokenResult
from ..utils.formatters import basic_auth_header, mask_token
from ..utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service for obtaining Daraja OAuth access tokens.

    Tokens are fetched fresh on every call; nothing is cached between
    requests.
    """

    def __init__(self, config: Optional[MpesaConfig] = None, http_client: Optional[HTTPClient] = None):
        self.config = config or get_config()
        self.http_client = http_client or HTTPClient(self.config.api_base_url, timeout=self.config.timeout)

    def acquire_token(self) -> TokenResult:
        """
        Request a new access token from Daraja.

        Returns:
            TokenResult holding the token, or the reason none is available.
            Never raises for gateway or configuration problems.
        """
        if self.config.mock:
            return TokenResult.success(MOCK_ACCESS_TOKEN)

        if not self.config.has_credentials:
            logger.error(
                "Cannot fetch access token: missing MPESA_CONSUMER_KEY or MPESA_CONSUMER_SECRET"
            )
            return TokenResult.failed(TokenFailure.NOT_CONFIGURED)

        headers = {
            'Authorization': basic_auth_header(self.config.consumer_key, self.config.consumer_secret),
            'Accept': 'application/json',
        }

        try:
            response = self.http_client.get(
                endpoint=APIEndpoints.GENERATE_TOKEN,
                params={'grant_type': 'client_credentials'},
                headers=headers
            )
        except APIError as e:
            logger.error(f"Error fetching token: {self._describe(e)}")
            return TokenResult.failed(TokenFailure.GATEWAY_ERROR)

        token = response.get('access_token') if isinstance(response, dict) else None
        if not token:
            logger.error("Error fetching token: no access_token in response")
            return TokenResult.failed(TokenFailure.GATEWAY_ERROR)

        # Log only the presence of the token
        logger.info("Fetched access token successfully")
        return TokenResult.success(token)

    def get_masked_token(self) -> Optional[str]:
        """
        Fetch a token and return only its first characters.

        Returns:
            Masked token, or None if no token could be obtained
        """
        result = self.acquire_token()
        if not result.ok:
            return None
        return mask_token(result.token)

    @staticmethod
    def _describe(error: APIError) -> str:
        body = error.response_data
        if isinstance(body, dict):
            return body.get('error_description') or body.get('errorMessage') or str(body)
        return str(body or error.message)

    def close(self):
        """Close the underlying HTTP session."""
        self.http_client.close()
