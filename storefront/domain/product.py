"""Catalog product as read from the products table."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from .cart import CartLineInput, to_decimal
from .vendor import UnknownVendor, VendorRef, parse_vendor_ref, vendor_cart_label


@dataclass(slots=True)
class Product:
    id: str
    name: str
    price: Decimal
    image_url: str | None = None
    vendor_id: str | None = None
    vendor: VendorRef = field(default_factory=UnknownVendor)
    colors: list[str] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Product:
        """Build from a PostgREST row; raises ValueError on a missing id or a bad price."""
        product_id = row.get("id")
        if product_id is None or str(product_id) == "":
            raise ValueError("product row has no id")
        colors = row.get("colors") or []
        if not isinstance(colors, list):
            colors = []
        price = to_decimal(row.get("price"))
        if price < 0:
            raise ValueError(f"product {product_id} has a negative price")
        vendor_id = row.get("vendor_id")
        return cls(
            id=str(product_id),
            name=str(row.get("name") or ""),
            price=price,
            image_url=row.get("image_url") or None,
            vendor_id=str(vendor_id) if vendor_id else None,
            vendor=parse_vendor_ref(row.get("vendors")),
            colors=[str(c) for c in colors if c],
        )

    def to_line_input(self, color: str | None = None) -> CartLineInput:
        return CartLineInput(
            product_id=self.id,
            name=self.name,
            unit_price=self.price,
            image_url=self.image_url,
            vendor_label=vendor_cart_label(self.vendor, self.vendor_id),
            color=color,
        )
