"""
Custom exceptions for M-PESA operations.
"""


class MpesaException(Exception):
    """Base exception for all M-PESA-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class APIError(MpesaException):
    """Raised when the Daraja API returns an error or cannot be reached."""
    pass


class AuthenticationError(APIError):
    """Raised when Daraja rejects the supplied credentials (401/403)."""
    pass


class ValidationError(MpesaException):
    """Raised when input validation fails."""
    pass


class ConfigurationError(MpesaException):
    """Raised when there's a configuration issue."""
    pass
