"""
Sentry Integration for Error Tracking.

Initializes Sentry for the bot process when a DSN is configured.
Errors logged at ERROR level are sent as events.
"""

import logging

import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)


def init_sentry(dsn: str | None, environment: str = "development", release: str | None = None) -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False

    logging_integration = LoggingIntegration(
        level=logging.INFO,  # breadcrumbs
        event_level=logging.ERROR,
    )

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=0.1,
        integrations=[
            AioHttpIntegration(),
            logging_integration,
        ],
        # Delivery details are personal data
        send_default_pii=False,
        release=release or "local",
    )

    logger.info(f"Sentry initialized for environment: {environment}")
    return True
