"""Cart view and editing handlers."""
from __future__ import annotations

import logging

from aiogram import F, Router, types
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command

from storefront.core.navigation import Route
from storefront.interfaces.bot.keyboards import cart_keyboard
from storefront.interfaces.bot.presenters.cart_messages import cart_cleared_text, cart_text

from .common import get_registry

logger = logging.getLogger(__name__)


async def _refresh_cart_message(callback: types.CallbackQuery) -> None:
    """Redraw the cart in place after an edit."""
    registry = get_registry()
    cart = registry.get(callback.from_user.id).cart
    snapshot = cart.snapshot()
    try:
        await callback.message.edit_text(
            cart_text(snapshot, registry.settings.currency_symbol),
            parse_mode="HTML",
            reply_markup=cart_keyboard(snapshot),
        )
    except TelegramAPIError as exc:
        # "message is not modified" and friends
        logger.debug("Cart redraw skipped: %s", exc)


async def cmd_cart(message: types.Message) -> None:
    await get_registry().navigator_for(message.from_user.id).navigate(Route.CART)


async def cart_view(callback: types.CallbackQuery) -> None:
    await get_registry().navigator_for(callback.from_user.id).navigate(Route.CART)
    await callback.answer()


async def shop_home(callback: types.CallbackQuery) -> None:
    await get_registry().navigator_for(callback.from_user.id).navigate(Route.SHOP)
    await callback.answer()


async def cart_noop(callback: types.CallbackQuery) -> None:
    await callback.answer()


async def cart_change_quantity(callback: types.CallbackQuery) -> None:
    if not callback.message:
        await callback.answer()
        return

    data = callback.data or ""
    cart = get_registry().get(callback.from_user.id).cart
    if data.startswith("cart_inc_"):
        product_id, delta = data.removeprefix("cart_inc_"), 1
    else:
        product_id, delta = data.removeprefix("cart_dec_"), -1

    line = next((ln for ln in cart.lines if ln.product_id == product_id), None)
    if line is None:
        await callback.answer("This item is no longer in your cart")
        return

    cart.set_quantity(product_id, line.quantity + delta)
    await _refresh_cart_message(callback)
    await callback.answer()


async def cart_remove(callback: types.CallbackQuery) -> None:
    if not callback.message:
        await callback.answer()
        return

    product_id = (callback.data or "").removeprefix("cart_remove_")
    get_registry().get(callback.from_user.id).cart.remove_item(product_id)
    await _refresh_cart_message(callback)
    await callback.answer()


async def cart_clear(callback: types.CallbackQuery) -> None:
    if not callback.message:
        await callback.answer()
        return

    get_registry().get(callback.from_user.id).cart.clear()
    try:
        await callback.message.edit_text(cart_cleared_text(), parse_mode="HTML")
    except TelegramAPIError as exc:
        logger.debug("Cart cleared message not edited: %s", exc)
    await callback.answer()


def register(router: Router) -> None:
    """Register cart view handlers on the given router."""
    router.message.register(cmd_cart, Command("cart"))
    router.callback_query.register(cart_view, F.data == "cart_view")
    router.callback_query.register(shop_home, F.data == "shop_home")
    router.callback_query.register(cart_noop, F.data == "cart_noop")
    router.callback_query.register(
        cart_change_quantity, F.data.startswith("cart_inc_") | F.data.startswith("cart_dec_")
    )
    router.callback_query.register(cart_remove, F.data.startswith("cart_remove_"))
    router.callback_query.register(cart_clear, F.data == "cart_clear")
