import logging
from django.core.signals import setting_changed
from django.dispatch import receiver

from mpesa.config import get_config

logger = logging.getLogger(__name__)


@receiver(setting_changed)
def reload_mpesa_config(sender, setting, **kwargs):
    """Drop the cached configuration when an MPESA_* setting changes."""
    if setting.startswith('MPESA_'):
        get_config.cache_clear()
        logger.debug(f"M-PESA configuration reloaded after {setting} changed")
