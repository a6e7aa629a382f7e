"""Cart system orchestrator for cart-related flows.

Wires the view, add-to-cart and checkout submodules onto one router.
"""
from __future__ import annotations

from aiogram import Router

from storefront.interfaces.bot.sessions import SessionRegistry

from . import add as cart_add
from . import checkout as cart_checkout
from . import view as cart_view
from .common import setup_dependencies as _setup_common_dependencies

router = Router(name="cart")


def setup_dependencies(registry: SessionRegistry) -> None:
    """Set the session registry and register all cart handlers."""
    _setup_common_dependencies(registry)

    cart_add.register(router)
    cart_view.register(router)
    cart_checkout.register(router)
