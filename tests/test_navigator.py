"""Tests for BotNavigator."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.exceptions import TelegramBadRequest

from helpers import make_line
from storefront.core.cart_store import CartStore
from storefront.core.navigation import Route
from storefront.interfaces.bot.navigator import BotNavigator


@pytest.fixture
def bot() -> AsyncMock:
    return AsyncMock()


def _sent_text(bot: AsyncMock) -> str:
    return bot.send_message.await_args.args[1]


@pytest.mark.asyncio
async def test_cart_route_renders_cart(bot, cart: CartStore) -> None:
    cart.add_item(make_line("p1", 1000))
    await BotNavigator(bot, 7, cart).navigate(Route.CART)

    bot.send_message.assert_awaited_once()
    assert bot.send_message.await_args.args[0] == 7
    assert "₦1,000" in _sent_text(bot)
    assert bot.send_message.await_args.kwargs["parse_mode"] == "HTML"


@pytest.mark.asyncio
async def test_thank_you_renders_before_acknowledging(bot, cart: CartStore) -> None:
    cart.add_item(make_line("p1", 1000))
    acknowledged = []

    async def check_cart_still_full(*args, **kwargs):
        assert not cart.is_empty
        assert not acknowledged

    bot.send_message.side_effect = check_cart_still_full

    await BotNavigator(bot, 7, cart).navigate(
        Route.THANK_YOU, order_id="o-9", on_rendered=lambda: acknowledged.append(True)
    )

    assert acknowledged == [True]
    assert "o-9" in _sent_text(bot)
    assert "₦1,000" in _sent_text(bot)


@pytest.mark.asyncio
async def test_failed_render_does_not_acknowledge(bot, cart: CartStore) -> None:
    bot.send_message.side_effect = TelegramBadRequest(method=MagicMock(), message="chat not found")
    acknowledged = []

    await BotNavigator(bot, 7, cart).navigate(
        Route.THANK_YOU, on_rendered=lambda: acknowledged.append(True)
    )

    assert acknowledged == []


@pytest.mark.asyncio
async def test_home_and_shop_render_welcome(bot, cart: CartStore) -> None:
    navigator = BotNavigator(bot, 7, cart)
    await navigator.navigate(Route.HOME)
    await navigator.navigate(Route.SHOP)

    assert bot.send_message.await_count == 2
    assert "Welcome" in _sent_text(bot)


@pytest.mark.asyncio
async def test_unknown_route_sends_nothing(bot, cart: CartStore) -> None:
    await BotNavigator(bot, 7, cart).navigate("/nowhere")
    bot.send_message.assert_not_awaited()
