"""Tests for SessionRegistry and bootstrap wiring."""
from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from helpers import make_line
from storefront.core import bootstrap
from storefront.core.redis_storage import RedisStorage
from storefront.core.storage import FileStorage, MemoryStorage
from storefront.integrations.rest_tables import MemoryTableClient, RestTableClient
from storefront.interfaces.bot.sessions import SessionRegistry


@pytest.fixture
def registry(storage, tables, settings) -> SessionRegistry:
    return SessionRegistry(storage, tables, AsyncMock(), settings)


def test_sessions_are_per_user(registry: SessionRegistry) -> None:
    first = registry.get(1)
    assert registry.get(1) is first
    assert registry.get(2) is not first
    assert first.cart.key == "talktoshop_cart:1"


def test_display_name_sets_identity(registry: SessionRegistry) -> None:
    session = registry.get(1, display_name="Ada")
    assert not session.auth.is_guest
    assert session.auth.current().display_name == "Ada"


def test_start_checkout_replaces_previous(registry: SessionRegistry) -> None:
    first = registry.start_checkout(1)
    second = registry.start_checkout(1)

    assert first is not second
    assert registry.current_checkout(1) is second
    registry.end_checkout(1)
    assert registry.current_checkout(1) is None


def test_idempotency_tokens_follow_setting(storage, tables, settings) -> None:
    plain = SessionRegistry(storage, tables, AsyncMock(), settings).start_checkout(1)
    assert plain._idempotency_tokens is None

    opted_in = replace(settings, order_idempotency=True)
    flow = SessionRegistry(storage, tables, AsyncMock(), opted_in).start_checkout(1)
    assert flow._idempotency_tokens is not None
    assert len(flow._idempotency_tokens()) == 32


@pytest.mark.asyncio
async def test_fetch_product(registry: SessionRegistry, tables: MemoryTableClient) -> None:
    tables.tables["products"] = [
        {"id": "p1", "name": "Dress", "price": 1000, "vendor_id": "v-1", "colors": ["red"]},
        {"id": "bad", "name": "No price"},
    ]

    product = await registry.fetch_product("p1")

    assert product.name == "Dress"
    assert product.colors == ["red"]
    assert await registry.fetch_product("bad") is None
    assert await registry.fetch_product("missing") is None


@pytest.mark.asyncio
async def test_fetch_product_rejects_negative_price(registry: SessionRegistry, tables: MemoryTableClient) -> None:
    tables.tables["products"] = [{"id": "p1", "name": "Refund", "price": -5000}]
    assert await registry.fetch_product("p1") is None


def test_cart_survives_registry_restart(storage, tables, settings) -> None:
    SessionRegistry(storage, tables, AsyncMock(), settings).get(5).cart.add_item(make_line())
    restored = SessionRegistry(storage, tables, AsyncMock(), settings).get(5).cart
    assert restored.item_count == 1


def test_cart_storage_selection(settings, tmp_path) -> None:
    assert isinstance(bootstrap.build_cart_storage(settings), MemoryStorage)

    with_dir = replace(settings, cart=replace(settings.cart, storage_dir=str(tmp_path)))
    assert isinstance(bootstrap.build_cart_storage(with_dir), FileStorage)


def test_cart_storage_prefers_redis(settings, monkeypatch) -> None:
    class Client:
        def ping(self) -> bool:
            return True

    import storefront.core.redis_storage as redis_storage_module

    monkeypatch.setattr(redis_storage_module.redis, "from_url", lambda *a, **kw: Client())
    with_redis = replace(settings, cart=replace(settings.cart, redis_url="redis://fake"))
    assert isinstance(bootstrap.build_cart_storage(with_redis), RedisStorage)


def test_tables_selection(settings) -> None:
    assert isinstance(bootstrap.build_tables(settings), MemoryTableClient)

    configured = replace(
        settings,
        backend=replace(settings.backend, url="https://demo.supabase.co", api_key="anon"),
    )
    assert isinstance(bootstrap.build_tables(configured), RestTableClient)


class Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_idle_session_is_dropped_and_cart_reloaded(storage, tables, settings) -> None:
    clock = Clock()
    registry = SessionRegistry(storage, tables, AsyncMock(), settings, ttl=10, timer=clock)
    first = registry.get(1)
    first.cart.add_item(make_line("p1", 1000))
    registry.start_checkout(1)

    clock.now = 11
    assert registry.current_checkout(1) is None

    second = registry.get(1)
    assert second is not first
    assert second.cart.item_count == 1
    assert second.checkout is None


def test_activity_keeps_session_alive(storage, tables, settings) -> None:
    clock = Clock()
    registry = SessionRegistry(storage, tables, AsyncMock(), settings, ttl=10, timer=clock)
    first = registry.get(1)

    for step in (8, 16, 24):
        clock.now = step
        assert registry.get(1) is first


def test_registry_is_bounded(storage, tables, settings) -> None:
    registry = SessionRegistry(storage, tables, AsyncMock(), settings, maxsize=2)
    first = registry.get(1)
    registry.get(2)
    registry.get(3)

    assert len(registry._sessions) == 2
    assert registry.get(1) is not first
