"""Application bootstrap wiring bot, dispatcher, cart storage and tables."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import redis
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage as FSMMemoryStorage
from aiogram.fsm.storage.redis import RedisStorage as FSMRedisStorage

from storefront.integrations.rest_tables import MemoryTableClient, RestTableClient
from storefront.interfaces.bot.sessions import SessionRegistry

from .config import Settings
from .constants import CART_TTL_SECONDS
from .exceptions import StorageException
from .redis_storage import RedisStorage
from .storage import FileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


@dataclass
class Application:
    bot: Bot
    dispatcher: Dispatcher
    registry: SessionRegistry
    tables: RestTableClient | MemoryTableClient


def _build_fsm_storage(settings: Settings) -> BaseStorage:
    if settings.cart.redis_url:
        try:
            storage = FSMRedisStorage.from_url(settings.cart.redis_url)
            logger.info("Using Redis for FSM storage")
            return storage
        except (redis.RedisError, ValueError) as exc:
            logger.warning("Failed to initialize Redis FSM storage, using MemoryStorage: %s", exc)
    else:
        logger.info("Using MemoryStorage for FSM, states are lost on restart")
    return FSMMemoryStorage()


def build_cart_storage(settings: Settings) -> KeyValueStorage:
    """Redis first, then a directory of JSON files, then process memory."""
    if settings.cart.redis_url:
        storage = RedisStorage(settings.cart.redis_url, ttl_seconds=CART_TTL_SECONDS)
        if storage.using_redis:
            return storage

    if settings.cart.storage_dir:
        try:
            files = FileStorage(settings.cart.storage_dir)
            logger.info("Cart storage: files under %s", settings.cart.storage_dir)
            return files
        except StorageException as exc:
            logger.warning("File cart storage unavailable: %s", exc)

    logger.warning("Cart storage is in memory only, carts are lost on restart")
    return MemoryStorage()


def build_tables(settings: Settings) -> RestTableClient | MemoryTableClient:
    backend = settings.backend
    if backend.configured:
        logger.info("Orders are written to %s", backend.url)
        return RestTableClient(backend.url, backend.api_key, timeout=backend.timeout_seconds)
    logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY not set, orders are kept in memory")
    return MemoryTableClient()


def build_application(settings: Settings) -> Application:
    """Create bot runtime components from configuration."""
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher(storage=_build_fsm_storage(settings))
    tables = build_tables(settings)
    registry = SessionRegistry(build_cart_storage(settings), tables, bot, settings)
    return Application(bot=bot, dispatcher=dispatcher, registry=registry, tables=tables)
