"""
TalkToShop Telegram Bot - entry point.

Cart and bank-transfer checkout for the TalkToShop multi-vendor storefront.
Runs in long-polling mode.
"""
from __future__ import annotations

import asyncio
import sys

from handlers.cart import router as cart_router
from handlers.cart import setup_dependencies
from storefront.core.bootstrap import Application, build_application
from storefront.core.config import Settings, load_settings
from storefront.core.exceptions import ConfigurationException
from storefront.integrations.sentry_integration import init_sentry
from storefront.logging_config import setup_logging

logger = setup_logging()


def create_app(settings: Settings) -> Application:
    """Build the runtime and attach handlers."""
    if not settings.bot_token:
        raise ConfigurationException("BOT_TOKEN is not set")

    app = build_application(settings)
    setup_dependencies(app.registry)
    app.dispatcher.include_router(cart_router)
    return app


async def run_polling(app: Application) -> None:
    logger.info("=" * 50)
    logger.info("Starting TalkToShop bot (polling)")
    logger.info("Orders backend: %s", "REST" if app.registry.settings.backend.configured else "memory")
    logger.info("=" * 50)
    try:
        await app.dispatcher.start_polling(app.bot)
    finally:
        await app.tables.close()
        await app.bot.session.close()


def main() -> None:
    try:
        settings = load_settings()
        init_sentry(settings.sentry_dsn, environment=settings.environment)
        app = create_app(settings)
    except ConfigurationException as exc:
        logger.error("Configuration error: %s", exc.message)
        sys.exit(1)

    try:
        asyncio.run(run_polling(app))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    main()
