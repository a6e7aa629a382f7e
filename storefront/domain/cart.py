"""Cart domain types and snapshot serialization."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Coerce a price-like value to Decimal without float rounding noise."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a price")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"invalid price: {value!r}") from exc
    # NaN and Infinity would break comparisons and JSON output later
    if not result.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return result


def price_to_json(value: Decimal) -> int | float:
    """Integral prices stay ints; fractional ones become the shortest float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


@dataclass(slots=True)
class CartLineInput:
    """What the shopper picked on a product screen."""

    product_id: str
    name: str
    unit_price: Decimal
    image_url: str | None = None
    vendor_label: str = ""
    color: str | None = None


@dataclass(slots=True)
class CartLine:
    """One product held in the cart."""

    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    image_url: str | None = None
    vendor_label: str = ""
    colors: list[str] = field(default_factory=list)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.product_id,
            "name": self.name,
            "price": price_to_json(self.unit_price),
            "quantity": int(self.quantity),
            "image_url": self.image_url,
            "vendor": self.vendor_label,
            "colors": list(self.colors),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartLine:
        """Build a line from its persisted form; raises ValueError when malformed."""
        if not isinstance(data, dict):
            raise ValueError("cart line must be an object")

        product_id = data.get("id")
        if product_id is None or str(product_id) == "":
            raise ValueError("cart line without id")

        unit_price = to_decimal(data.get("price", 0))
        if unit_price < 0:
            raise ValueError("negative price")

        quantity = data.get("quantity", 1)
        if isinstance(quantity, bool) or not isinstance(quantity, (int, Decimal)):
            raise ValueError("quantity must be an integer")
        quantity = int(quantity)
        if quantity < 1:
            raise ValueError("quantity must be >= 1")

        colors = data.get("colors") or []
        if not isinstance(colors, list):
            raise ValueError("colors must be a list")

        image_url = data.get("image_url")
        return cls(
            product_id=str(product_id),
            name=str(data.get("name", "")),
            unit_price=unit_price,
            quantity=quantity,
            image_url=str(image_url) if image_url else None,
            vendor_label=str(data.get("vendor") or ""),
            colors=[str(color) for color in colors],
        )


@dataclass(frozen=True, slots=True)
class CartSnapshot:
    """Immutable view of the cart; totals are derived, never stored."""

    lines: tuple[CartLine, ...] = ()

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal(0))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def serialize_lines(lines: Iterable[CartLine]) -> str:
    return json.dumps([line.to_dict() for line in lines], ensure_ascii=False)


def deserialize_lines(raw: str | None) -> list[CartLine]:
    """Restore lines from storage. Anything unreadable yields an empty cart."""
    if not raw:
        return []
    try:
        payload = json.loads(raw, parse_float=Decimal)
        if not isinstance(payload, list):
            raise ValueError("cart snapshot must be a list")
        return [CartLine.from_dict(item) for item in payload]
    except (ValueError, TypeError, ArithmeticError) as exc:
        logger.warning("Discarding unreadable cart snapshot: %s", exc)
        return []
