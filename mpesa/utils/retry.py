"""
Bounded retry policy for Daraja submissions.
"""

import re
from dataclasses import dataclass
from typing import Callable

from ..constants import (
    INVALID_TOKEN_ERROR_CODE,
    INVALID_TOKEN_MESSAGE,
    MAX_SUBMIT_ATTEMPTS,
)

_INVALID_TOKEN_RE = re.compile(re.escape(INVALID_TOKEN_MESSAGE), re.IGNORECASE)


def is_invalid_token_error(error: Exception) -> bool:
    """
    Check whether a failed Daraja call was rejected for an invalid or
    expired access token.

    Daraja signals this with ``errorCode`` 404.001.03 or an ``errorMessage``
    containing "Invalid Access Token".
    """
    body = getattr(error, 'response_data', None)
    if not isinstance(body, dict):
        return False
    if body.get('errorCode') == INVALID_TOKEN_ERROR_CODE:
        return True
    return bool(_INVALID_TOKEN_RE.search(str(body.get('errorMessage') or '')))


@dataclass(frozen=True)
class RetryPolicy:
    """
    Decide whether a failed attempt may be repeated.

    Attributes:
        max_attempts: Total attempts allowed, including the first
        retry_on: Predicate selecting the errors worth retrying
    """

    max_attempts: int = MAX_SUBMIT_ATTEMPTS
    retry_on: Callable[[Exception], bool] = is_invalid_token_error

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """
        Args:
            error: Error raised by the attempt
            attempt: 1-based number of the attempt that failed
        """
        return attempt < self.max_attempts and self.retry_on(error)


TOKEN_REFRESH_POLICY = RetryPolicy()
