import logging
from .config import get_settings

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    """Initialize Sentry error tracking (production only)

    Only initializes if SENTRY_DSN is configured and environment is production.
    Returns whether Sentry was initialized.
    """
    settings = get_settings()

    # Skip if no DSN configured
    if not settings.sentry_dsn:
        logger.debug("Sentry not configured (SENTRY_DSN not set)")
        return False

    # Skip if not in production
    if not settings.is_production:
        logger.debug("Sentry disabled outside production")
        return False

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.starlette import StarletteIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[
            FastApiIntegration(),
            StarletteIntegration(),
            SqlalchemyIntegration(),
            LoggingIntegration(
                level=logging.INFO,  # Capture info and above
                event_level=logging.ERROR,  # Send errors to Sentry
            ),
        ],
        traces_sample_rate=0.1,  # Sample 10% of transactions
        environment=settings.environment,
        send_default_pii=False,  # Request URLs may carry the API key
    )

    logger.info("Sentry initialized successfully")
    return True
