"""Custom exceptions for the TalkToShop storefront."""
from __future__ import annotations

from typing import Any


class StorefrontException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class PersistenceException(StorefrontException):
    """Backend table write/read failed (network, HTTP or service error)."""

    def __init__(self, message: str, status: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.details = details


class StorageException(StorefrontException):
    """Local key-value storage errors."""

    pass


class ConfigurationException(StorefrontException):
    """Configuration errors."""

    pass
