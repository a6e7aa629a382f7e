"""Shared pytest fixtures for cart and checkout tests."""
from __future__ import annotations

from typing import Any

import pytest

from helpers import RecordingNavigator
from storefront.application.checkout import CheckoutFlow
from storefront.core.cart_store import CartStore
from storefront.core.config import (
    BackendConfig,
    BankTransferConfig,
    CartConfig,
    Settings,
)
from storefront.core.storage import MemoryStorage
from storefront.integrations.rest_tables import MemoryTableClient


@pytest.fixture
def bank() -> BankTransferConfig:
    return BankTransferConfig(
        account_name="Test Account",
        bank_name="Test Bank",
        account_number="0123456789",
        contact_url="https://wa.me/2340000000000",
    )


@pytest.fixture
def settings(bank: BankTransferConfig) -> Settings:
    return Settings(
        bot_token="42:TEST",
        backend=BackendConfig(
            url=None,
            api_key=None,
            orders_table="orders",
            products_table="products",
            timeout_seconds=5.0,
        ),
        cart=CartConfig(
            storage_key="talktoshop_cart",
            storage_dir=None,
            redis_url=None,
            clear_delay_seconds=0.05,
        ),
        bank=bank,
        order_idempotency=False,
        currency_symbol="₦",
        sentry_dsn=None,
        environment="test",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cart(storage: MemoryStorage) -> CartStore:
    return CartStore(storage)


@pytest.fixture
def tables() -> MemoryTableClient:
    return MemoryTableClient()


@pytest.fixture
def navigator(cart: CartStore) -> RecordingNavigator:
    return RecordingNavigator(cart)


@pytest.fixture
def make_flow(cart, tables, navigator, bank):
    def _make(**kwargs: Any) -> CheckoutFlow:
        kwargs.setdefault("clear_delay", 0.05)
        return CheckoutFlow(cart, tables, navigator, bank=bank, **kwargs)

    return _make
