import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MpesaStkConfig(AppConfig):
    name = 'mpesa'
    verbose_name = 'M-PESA STK Push'

    def ready(self):
        """
        Connect signal handlers and report the active configuration.
        Only setting names are logged, never their values.
        """
        from . import handlers  # noqa: F401
        from .config import get_config

        config = get_config()
        missing = config.missing_settings()
        if missing:
            logger.warning(f"Missing M-PESA settings: {', '.join(missing)}")

        logger.info(f"Running in {config.environment.value} mode")
        logger.info(f"Using base URL: {config.api_base_url}")
        if config.mock:
            logger.info("MPESA_MOCK is enabled - running in simulated mode (no external calls)")
