"""Navigator that renders routes as Telegram messages."""
from __future__ import annotations

import logging
from typing import Any, Callable

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import InlineKeyboardMarkup

from storefront.core.cart_store import CartStore
from storefront.core.constants import DEFAULT_CURRENCY_SYMBOL
from storefront.core.navigation import Route

from .keyboards import cart_keyboard, shop_keyboard
from .presenters.cart_messages import cart_text, thank_you_text, welcome_text

logger = logging.getLogger(__name__)


class BotNavigator:
    """Sends one message per navigation to the shopper's chat."""

    def __init__(
        self,
        bot: Bot,
        chat_id: int,
        cart: CartStore,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ):
        self._bot = bot
        self._chat_id = chat_id
        self._cart = cart
        self._symbol = currency_symbol

    async def _send(self, text: str, reply_markup: InlineKeyboardMarkup | None = None) -> bool:
        try:
            await self._bot.send_message(
                self._chat_id, text, parse_mode="HTML", reply_markup=reply_markup
            )
        except TelegramAPIError as exc:
            logger.warning("Failed to render screen for chat %s: %s", self._chat_id, exc)
            return False
        return True

    async def navigate(self, route: str, **params: Any) -> None:
        if route == Route.CART:
            snapshot = self._cart.snapshot()
            await self._send(cart_text(snapshot, self._symbol), cart_keyboard(snapshot))
        elif route == Route.THANK_YOU:
            # The cart still holds the order here; it is cleared after acknowledgement.
            snapshot = self._cart.snapshot()
            rendered = await self._send(
                thank_you_text(snapshot, params.get("order_id"), self._symbol),
                shop_keyboard(),
            )
            on_rendered: Callable[[], None] | None = params.get("on_rendered")
            if rendered and on_rendered is not None:
                on_rendered()
        elif route in (Route.HOME, Route.SHOP):
            await self._send(welcome_text(), shop_keyboard())
        else:
            logger.warning("No screen for route %s", route)
