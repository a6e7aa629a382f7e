"""Environment-driven configuration objects for the storefront bot."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import (
    DEFAULT_BACKEND_TIMEOUT_SECONDS,
    DEFAULT_BANK_ACCOUNT_NAME,
    DEFAULT_BANK_ACCOUNT_NUMBER,
    DEFAULT_BANK_NAME,
    DEFAULT_CART_CLEAR_DELAY_SECONDS,
    DEFAULT_CART_STORAGE_KEY,
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_ORDERS_TABLE,
    DEFAULT_PAYMENT_CONTACT_URL,
    DEFAULT_PRODUCTS_TABLE,
)
from .exceptions import ConfigurationException


def _str_to_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"true", "1", "yes", "y"}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationException(f"{name} must not be negative")
    return value


@dataclass(slots=True)
class BankTransferConfig:
    account_name: str
    bank_name: str
    account_number: str
    contact_url: str


@dataclass(slots=True)
class BackendConfig:
    url: str | None
    api_key: str | None
    orders_table: str
    products_table: str
    timeout_seconds: float

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)


@dataclass(slots=True)
class CartConfig:
    storage_key: str
    storage_dir: str | None
    redis_url: str | None
    clear_delay_seconds: float


@dataclass(slots=True)
class Settings:
    bot_token: str | None
    backend: BackendConfig
    cart: CartConfig
    bank: BankTransferConfig
    order_idempotency: bool
    currency_symbol: str
    sentry_dsn: str | None
    environment: str


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    backend = BackendConfig(
        url=os.getenv("SUPABASE_URL") or None,
        api_key=os.getenv("SUPABASE_ANON_KEY") or None,
        orders_table=os.getenv("ORDERS_TABLE", DEFAULT_ORDERS_TABLE),
        products_table=os.getenv("PRODUCTS_TABLE", DEFAULT_PRODUCTS_TABLE),
        timeout_seconds=_float_env("BACKEND_TIMEOUT_SECONDS", DEFAULT_BACKEND_TIMEOUT_SECONDS),
    )

    cart = CartConfig(
        storage_key=os.getenv("CART_STORAGE_KEY", DEFAULT_CART_STORAGE_KEY),
        storage_dir=os.getenv("CART_STORAGE_DIR") or None,
        redis_url=os.getenv("REDIS_URL") or None,
        clear_delay_seconds=_float_env("CART_CLEAR_DELAY_SECONDS", DEFAULT_CART_CLEAR_DELAY_SECONDS),
    )

    bank = BankTransferConfig(
        account_name=os.getenv("BANK_ACCOUNT_NAME", DEFAULT_BANK_ACCOUNT_NAME),
        bank_name=os.getenv("BANK_NAME", DEFAULT_BANK_NAME),
        account_number=os.getenv("BANK_ACCOUNT_NUMBER", DEFAULT_BANK_ACCOUNT_NUMBER),
        contact_url=os.getenv("PAYMENT_CONTACT_URL", DEFAULT_PAYMENT_CONTACT_URL),
    )

    return Settings(
        bot_token=os.getenv("BOT_TOKEN") or None,
        backend=backend,
        cart=cart,
        bank=bank,
        order_idempotency=_str_to_bool(os.getenv("ORDER_IDEMPOTENCY")),
        currency_symbol=os.getenv("CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
        environment=os.getenv("ENVIRONMENT", "development"),
    )
