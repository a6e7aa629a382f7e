"""Routes and the navigator protocol the checkout flow talks to."""
from __future__ import annotations

from typing import Any, Protocol


class Route:
    HOME = "/"
    SHOP = "/shop"
    CART = "/cart"
    CHECKOUT = "/checkout"
    THANK_YOU = "/thank-you"


class Navigator(Protocol):
    async def navigate(self, route: str, **params: Any) -> None: ...
