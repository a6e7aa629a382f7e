"""Small builders shared by test modules."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from storefront.application.checkout import CheckoutFlow
from storefront.core.cart_store import CartStore
from storefront.domain.cart import CartLineInput


class RecordingNavigator:
    """Navigator that records routes; optionally acknowledges renders."""

    def __init__(self, cart: CartStore | None = None, acknowledge: bool = False):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.snapshots_seen: list[Any] = []
        self._cart = cart
        self._acknowledge = acknowledge

    async def navigate(self, route: str, **params: Any) -> None:
        self.calls.append((route, params))
        if self._cart is not None:
            self.snapshots_seen.append(self._cart.snapshot())
        on_rendered = params.get("on_rendered")
        if self._acknowledge and on_rendered is not None:
            on_rendered()

    @property
    def routes(self) -> list[str]:
        return [route for route, _ in self.calls]


def make_line(
    product_id: str = "p1",
    price: str | int = 1000,
    name: str = "Ankara Dress",
    color: str | None = None,
) -> CartLineInput:
    return CartLineInput(
        product_id=product_id,
        name=name,
        unit_price=Decimal(str(price)),
        image_url=f"https://cdn.example.com/{product_id}.jpg",
        vendor_label="vendor-7",
        color=color,
    )


def fill_delivery(flow: CheckoutFlow) -> None:
    flow.update_field("full_name", "Ada Obi")
    flow.update_field("email", "ada@example.com")
    flow.update_field("phone", "+2348000000000")
    flow.update_field("address", "12 Marina Rd, Lagos")
