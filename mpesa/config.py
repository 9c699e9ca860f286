"""
Configuration management for the M-PESA STK push relay.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from django.conf import settings

from .constants import BASE_URLS, DEFAULT_TIMEOUT, Environment
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = (
    'MPESA_CONSUMER_KEY',
    'MPESA_CONSUMER_SECRET',
    'MPESA_BUSINESS_SHORTCODE',
    'MPESA_PASSKEY',
    'MPESA_CALLBACK_URL',
)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)


@dataclass(frozen=True)
class MpesaConfig:
    """
    Immutable M-PESA settings.

    Built once from Django settings and handed to the services that need it,
    so nothing reads ``django.conf.settings`` mid-request.
    """

    consumer_key: str = ''
    consumer_secret: str = ''
    business_shortcode: str = ''
    passkey: str = ''
    callback_url: str = ''
    environment: Environment = Environment.SANDBOX
    mock: bool = False
    timeout: int = DEFAULT_TIMEOUT
    base_url_override: str = ''

    @classmethod
    def from_settings(cls) -> 'MpesaConfig':
        """Load configuration from Django settings."""
        raw_env = (getattr(settings, 'MPESA_ENV', '') or Environment.SANDBOX.value)
        try:
            environment = Environment(str(raw_env).strip().lower())
        except ValueError:
            logger.warning(f"Unknown MPESA_ENV '{raw_env}', falling back to sandbox")
            environment = Environment.SANDBOX

        return cls(
            consumer_key=getattr(settings, 'MPESA_CONSUMER_KEY', '') or '',
            consumer_secret=getattr(settings, 'MPESA_CONSUMER_SECRET', '') or '',
            business_shortcode=str(getattr(settings, 'MPESA_BUSINESS_SHORTCODE', '') or ''),
            passkey=getattr(settings, 'MPESA_PASSKEY', '') or '',
            callback_url=getattr(settings, 'MPESA_CALLBACK_URL', '') or '',
            environment=environment,
            mock=_as_bool(getattr(settings, 'MPESA_MOCK', False)),
            timeout=int(getattr(settings, 'MPESA_TIMEOUT', DEFAULT_TIMEOUT)),
            base_url_override=getattr(settings, 'MPESA_API_BASE_URL', '') or '',
        )

    @property
    def api_base_url(self) -> str:
        """Get Daraja API base URL for the configured environment."""
        return self.base_url_override or BASE_URLS[self.environment]

    @property
    def has_credentials(self) -> bool:
        return bool(self.consumer_key and self.consumer_secret)

    def missing_settings(self) -> List[str]:
        """Names of required settings that are not configured."""
        values = {
            'MPESA_CONSUMER_KEY': self.consumer_key,
            'MPESA_CONSUMER_SECRET': self.consumer_secret,
            'MPESA_BUSINESS_SHORTCODE': self.business_shortcode,
            'MPESA_PASSKEY': self.passkey,
            'MPESA_CALLBACK_URL': self.callback_url,
        }
        return [name for name in REQUIRED_SETTINGS if not values[name]]

    def require(self):
        """
        Raise ConfigurationError unless the relay can talk to Daraja.
        Mock mode needs no credentials.
        """
        if self.mock:
            return
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(
                f"Missing M-PESA settings: {', '.join(missing)}. "
                "Please add them to your settings.py or .env file."
            )


@lru_cache(maxsize=None)
def get_config() -> MpesaConfig:
    """Process-wide configuration, loaded on first use."""
    return MpesaConfig.from_settings()
