"""
HTTP client for Daraja API communication.
"""

import requests
import logging
from typing import Dict, Any, Optional
from mpesa.exceptions import APIError, AuthenticationError
from mpesa.constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    HTTP client wrapper for Daraja API requests.
    Handles request/response, error handling and logging.
    """

    def __init__(self, base_url: str, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, headers: Dict, data: Optional[Dict] = None):
        """Log API request details."""
        logger.info(f"M-PESA API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if data:
            logger.debug(f"Payload: {self._sanitize_payload(data)}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"M-PESA API Response: {response.status_code}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        if 'Authorization' in sanitized:
            scheme = sanitized['Authorization'].split(' ', 1)[0]
            sanitized['Authorization'] = f'{scheme} ***'
        return sanitized

    def _sanitize_payload(self, data: Dict) -> Dict:
        sanitized = dict(data)
        if 'Password' in sanitized:
            sanitized['Password'] = '***'
        return sanitized

    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        """Parsed JSON error body, falling back to the raw text."""
        try:
            return response.json()
        except ValueError:
            return response.text or None

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Handle API response and extract data.

        Args:
            response: Response object from requests

        Returns:
            Parsed JSON body, or the raw text when a successful response is not JSON

        Raises:
            APIError: If response indicates an error
            AuthenticationError: If Daraja rejects the credentials
        """
        self._log_response(response)

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Authentication failed with status {response.status_code}",
                error_code=response.status_code,
                response_data=self._error_body(response)
            )

        if response.status_code >= 400:
            error_data = self._error_body(response)
            error_message = f"API request failed with status {response.status_code}"
            if isinstance(error_data, dict):
                error_message = (
                    error_data.get('errorMessage')
                    or error_data.get('error_description')
                    or error_message
                )

            raise APIError(
                error_message,
                error_code=response.status_code,
                response_data=error_data
            )

        try:
            return response.json()
        except ValueError:
            logger.warning(f"M-PESA API returned a non-JSON body with status {response.status_code}")
            return response.text or None

    def _request(self, method: str, url: str, retries: int, **kwargs) -> Dict[str, Any]:
        for attempt in range(retries):
            try:
                response = self.session.request(method, url, timeout=self.timeout, **kwargs)
                return self._handle_response(response)

            except (requests.ConnectionError, requests.Timeout) as e:
                if attempt == retries - 1:
                    raise APIError(
                        f"Connection failed after {retries} attempt(s): {str(e)}",
                        response_data=str(e)
                    )
                logger.warning(f"Request failed (attempt {attempt + 1}/{retries}): {str(e)}")
            except requests.RequestException as e:
                raise APIError(f"Request failed: {str(e)}", response_data=str(e))

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        retries: int = 1
    ) -> Dict[str, Any]:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload
            headers: Request headers
            retries: Attempts on connection failure

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Content-Type', 'application/json')
        headers.setdefault('Accept', 'application/json')

        self._log_request('POST', url, headers, data)
        return self._request('POST', url, retries, json=data, headers=headers)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        retries: int = 1
    ) -> Dict[str, Any]:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            headers: Request headers
            retries: Attempts on connection failure

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Accept', 'application/json')

        self._log_request('GET', url, headers)
        return self._request('GET', url, retries, params=params, headers=headers)

    def close(self):
        """Close the session."""
        self.session.close()
