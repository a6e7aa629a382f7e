"""Start command with product deep links, and add-to-cart callbacks.

A shop page links to ``t.me/<bot>?start=add_<product_id>``; the bot then
shows the product card with its color or quantity choices.
"""
from __future__ import annotations

import logging

from aiogram import F, Router, types
from aiogram.filters import CommandObject, CommandStart

from storefront.core.constants import ADD_QUANTITY_CHOICES
from storefront.core.navigation import Route
from storefront.interfaces.bot.keyboards import product_keyboard
from storefront.interfaces.bot.presenters.cart_messages import added_to_cart_text, product_text

from .common import get_registry

logger = logging.getLogger(__name__)

DEEP_LINK_ADD_PREFIX = "add_"
PRODUCT_NOT_FOUND_TEXT = "😕 This product is no longer available."


async def cmd_start(message: types.Message, command: CommandObject) -> None:
    registry = get_registry()
    user = message.from_user
    registry.get(user.id, display_name=user.full_name)

    args = (command.args or "").strip()
    if not args.startswith(DEEP_LINK_ADD_PREFIX):
        await registry.navigator_for(user.id).navigate(Route.HOME)
        return

    product_id = args.removeprefix(DEEP_LINK_ADD_PREFIX)
    product = await registry.fetch_product(product_id)
    if product is None:
        await message.answer(PRODUCT_NOT_FOUND_TEXT)
        return

    text = product_text(product, registry.settings.currency_symbol)
    if product.image_url:
        await message.answer_photo(
            product.image_url,
            caption=text,
            parse_mode="HTML",
            reply_markup=product_keyboard(product),
        )
    else:
        await message.answer(text, parse_mode="HTML", reply_markup=product_keyboard(product))


async def _add_to_cart(
    callback: types.CallbackQuery,
    product_id: str,
    color_index: int | None,
    quantity: int = 1,
) -> None:
    registry = get_registry()
    product = await registry.fetch_product(product_id)
    if product is None:
        await callback.answer(PRODUCT_NOT_FOUND_TEXT, show_alert=True)
        return

    color = None
    if color_index is not None and 0 <= color_index < len(product.colors):
        color = product.colors[color_index]

    cart = registry.get(callback.from_user.id).cart
    item = product.to_line_input(color=color)
    for _ in range(quantity):
        line = cart.add_item(item)
    logger.info("User %s added %s to cart (qty %s)", callback.from_user.id, product.id, line.quantity)
    await callback.answer(added_to_cart_text(product.name, line.quantity))


async def cart_add(callback: types.CallbackQuery) -> None:
    product_id = (callback.data or "").removeprefix("cart_add_")
    await _add_to_cart(callback, product_id, None)


async def cart_add_color(callback: types.CallbackQuery) -> None:
    payload = (callback.data or "").removeprefix("cart_addc_")
    product_id, _, raw_index = payload.rpartition("_")
    try:
        color_index = int(raw_index)
    except ValueError:
        await callback.answer()
        return
    await _add_to_cart(callback, product_id, color_index)


async def cart_add_quantity(callback: types.CallbackQuery) -> None:
    payload = (callback.data or "").removeprefix("cart_addn_")
    product_id, _, raw_quantity = payload.rpartition("_")
    try:
        quantity = int(raw_quantity)
    except ValueError:
        quantity = 0
    if quantity not in ADD_QUANTITY_CHOICES:
        await callback.answer()
        return
    await _add_to_cart(callback, product_id, None, quantity)


def register(router: Router) -> None:
    """Register start and add-to-cart handlers on the given router."""
    router.message.register(cmd_start, CommandStart())
    router.callback_query.register(cart_add_color, F.data.startswith("cart_addc_"))
    router.callback_query.register(cart_add_quantity, F.data.startswith("cart_addn_"))
    router.callback_query.register(cart_add, F.data.startswith("cart_add_"))
