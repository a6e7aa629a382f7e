"""Shopper cart held in memory and mirrored to key-value storage.

One ``CartStore`` exists per shopper session and is handed to whoever needs
it. Every mutation updates the in-memory lines first, then writes the full
snapshot under a single key. A write that fails is logged and the in-memory
cart stays authoritative, so the caller never sees a storage error.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from storefront.domain.cart import (
    CartLine,
    CartLineInput,
    CartSnapshot,
    deserialize_lines,
    serialize_lines,
)

from .constants import DEFAULT_CART_STORAGE_KEY
from .exceptions import StorageException
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

CartListener = Callable[[CartSnapshot], None]


class CartStore:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_CART_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._listeners: list[CartListener] = []
        self._lines: list[CartLine] = self._restore()

    @property
    def key(self) -> str:
        return self._key

    def _restore(self) -> list[CartLine]:
        try:
            raw = self._storage.get(self._key)
        except (StorageException, OSError) as exc:
            logger.warning("Cart restore failed for %s, starting empty: %s", self._key, exc)
            return []
        return deserialize_lines(raw)

    def _persist(self) -> None:
        try:
            self._storage.set(self._key, serialize_lines(self._lines))
        except (StorageException, OSError) as exc:
            logger.warning("Cart persist failed for %s: %s", self._key, exc)

    def _commit(self) -> None:
        self._persist()
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Cart listener failed")

    def _find(self, product_id: str) -> CartLine | None:
        return next((line for line in self._lines if line.product_id == product_id), None)

    # ---- reads ----------------------------------------------------------

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            tuple(
                CartLine(
                    product_id=line.product_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    image_url=line.image_url,
                    vendor_label=line.vendor_label,
                    colors=list(line.colors),
                )
                for line in self._lines
            )
        )

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return self.snapshot().lines

    @property
    def subtotal(self) -> Decimal:
        return self.snapshot().subtotal

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    # ---- mutations ------------------------------------------------------

    def add_item(self, item: CartLineInput) -> CartLine:
        """Add one unit. Same product id merges into the existing line."""
        existing = self._find(item.product_id)
        if existing:
            # Colors stay as first recorded; one color per line downstream.
            existing.quantity += 1
            line = existing
            logger.debug("Cart %s: %s qty=%s", self._key, item.product_id, line.quantity)
        else:
            line = CartLine(
                product_id=item.product_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=1,
                image_url=item.image_url,
                vendor_label=item.vendor_label,
                colors=[item.color] if item.color else [],
            )
            self._lines.append(line)
            logger.info("Added item %s to cart %s", item.product_id, self._key)
        self._commit()
        return line

    def remove_item(self, product_id: str) -> None:
        before = len(self._lines)
        self._lines = [line for line in self._lines if line.product_id != product_id]
        if len(self._lines) != before:
            logger.info("Removed item %s from cart %s", product_id, self._key)
            self._commit()

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return
        line = self._find(product_id)
        if line is None:
            return
        line.quantity = int(quantity)
        self._commit()

    def clear(self) -> None:
        self._lines = []
        logger.info("Cleared cart %s", self._key)
        self._commit()

    # ---- observers ------------------------------------------------------

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
