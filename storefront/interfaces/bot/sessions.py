"""Per-shopper state for the bot: cart, identity and the open checkout."""
from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from aiogram import Bot
from cachetools import TTLCache

from storefront.application.checkout import CheckoutFlow, CheckoutState
from storefront.core.cart_store import CartStore
from storefront.core.config import Settings
from storefront.core.constants import (
    PRODUCT_COLUMNS,
    SESSION_CACHE_MAXSIZE,
    SESSION_IDLE_TTL_SECONDS,
)
from storefront.core.exceptions import PersistenceException
from storefront.core.storage import KeyValueStorage
from storefront.domain.product import Product
from storefront.integrations.auth import AuthState, Identity

from .navigator import BotNavigator

logger = logging.getLogger(__name__)


@dataclass
class ShopperSession:
    user_id: int
    cart: CartStore
    auth: AuthState
    checkout: CheckoutFlow | None = None


def _new_idempotency_token() -> str:
    return uuid.uuid4().hex


class SessionRegistry:
    """Creates sessions lazily; sessions idle longer than the TTL are dropped."""

    def __init__(
        self,
        storage: KeyValueStorage,
        tables: Any,
        bot: Bot,
        settings: Settings,
        *,
        maxsize: int = SESSION_CACHE_MAXSIZE,
        ttl: float = SESSION_IDLE_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._storage = storage
        self._tables = tables
        self._bot = bot
        self._settings = settings
        self._sessions: TTLCache[int, ShopperSession] = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    @property
    def settings(self) -> Settings:
        return self._settings

    def cart_key(self, user_id: int) -> str:
        return f"{self._settings.cart.storage_key}:{user_id}"

    def get(self, user_id: int, display_name: str | None = None) -> ShopperSession:
        session = self._sessions.get(user_id)
        if session is None:
            cart = CartStore(self._storage, key=self.cart_key(user_id))
            session = ShopperSession(user_id=user_id, cart=cart, auth=AuthState())
            logger.debug("Session created for user %s (%s items)", user_id, cart.item_count)
        # Re-inserting restarts the idle timer.
        self._sessions[user_id] = session
        if display_name is not None:
            session.auth.set_identity(Identity(user_id=str(user_id), display_name=display_name))
        return session

    def navigator_for(self, user_id: int) -> BotNavigator:
        session = self.get(user_id)
        return BotNavigator(
            self._bot,
            chat_id=user_id,
            cart=session.cart,
            currency_symbol=self._settings.currency_symbol,
        )

    def start_checkout(self, user_id: int) -> CheckoutFlow:
        """Open a fresh checkout, replacing any unfinished one."""
        session = self.get(user_id)
        previous = session.checkout
        if previous is not None and previous.pending_clear is not None:
            # Let a finished order's clear run before the cart is reused.
            previous.pending_clear.acknowledge()
        tokens = _new_idempotency_token if self._settings.order_idempotency else None
        session.checkout = CheckoutFlow(
            session.cart,
            self._tables,
            self.navigator_for(user_id),
            bank=self._settings.bank,
            clear_delay=self._settings.cart.clear_delay_seconds,
            orders_table=self._settings.backend.orders_table,
            idempotency_tokens=tokens,
            auth=session.auth,
        )
        return session.checkout

    def current_checkout(self, user_id: int) -> CheckoutFlow | None:
        session = self._sessions.get(user_id)
        if session is None or session.checkout is None:
            return None
        if session.checkout.state == CheckoutState.SUBMITTED:
            return None
        return session.checkout

    def end_checkout(self, user_id: int) -> None:
        session = self._sessions.get(user_id)
        if session is not None:
            session.checkout = None

    async def fetch_product(self, product_id: str) -> Product | None:
        try:
            row = await self._tables.select_one(
                self._settings.backend.products_table, product_id, columns=PRODUCT_COLUMNS
            )
        except PersistenceException as exc:
            logger.error("Product lookup %s failed: %s", product_id, exc.message)
            return None
        if row is None:
            return None
        try:
            return Product.from_row(row)
        except ValueError as exc:
            logger.warning("Product %s has a malformed row: %s", product_id, exc)
            return None
