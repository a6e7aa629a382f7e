"""Tests for environment-driven settings."""
from __future__ import annotations

import pytest

from storefront.core import config
from storefront.core.constants import (
    DEFAULT_BANK_ACCOUNT_NUMBER,
    DEFAULT_CART_CLEAR_DELAY_SECONDS,
    DEFAULT_CART_STORAGE_KEY,
    DEFAULT_PAYMENT_CONTACT_URL,
)
from storefront.core.exceptions import ConfigurationException

ENV_VARS = (
    "BOT_TOKEN",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "ORDERS_TABLE",
    "PRODUCTS_TABLE",
    "BACKEND_TIMEOUT_SECONDS",
    "CART_STORAGE_KEY",
    "CART_STORAGE_DIR",
    "REDIS_URL",
    "CART_CLEAR_DELAY_SECONDS",
    "BANK_ACCOUNT_NAME",
    "BANK_NAME",
    "BANK_ACCOUNT_NUMBER",
    "PAYMENT_CONTACT_URL",
    "ORDER_IDEMPOTENCY",
    "CURRENCY_SYMBOL",
    "SENTRY_DSN",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)


def test_defaults() -> None:
    settings = config.load_settings()

    assert settings.bot_token is None
    assert not settings.backend.configured
    assert settings.backend.orders_table == "orders"
    assert settings.cart.storage_key == DEFAULT_CART_STORAGE_KEY
    assert settings.cart.clear_delay_seconds == DEFAULT_CART_CLEAR_DELAY_SECONDS
    assert settings.bank.account_number == DEFAULT_BANK_ACCOUNT_NUMBER
    assert settings.bank.contact_url == DEFAULT_PAYMENT_CONTACT_URL
    assert settings.order_idempotency is False
    assert settings.currency_symbol == "₦"


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("CART_CLEAR_DELAY_SECONDS", "1.5")
    monkeypatch.setenv("ORDER_IDEMPOTENCY", "yes")
    monkeypatch.setenv("BANK_NAME", "Kuda")

    settings = config.load_settings()

    assert settings.backend.configured
    assert settings.cart.clear_delay_seconds == 1.5
    assert settings.order_idempotency is True
    assert settings.bank.bank_name == "Kuda"


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_bad_delay_is_a_configuration_error(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("CART_CLEAR_DELAY_SECONDS", raw)
    with pytest.raises(ConfigurationException):
        config.load_settings()
