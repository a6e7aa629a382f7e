"""Inline keyboards for cart and checkout screens."""
from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from storefront.core.constants import ADD_QUANTITY_CHOICES, MAX_BUTTON_TITLE_LENGTH
from storefront.domain.cart import CartSnapshot
from storefront.domain.product import Product


def _short(title: str) -> str:
    if len(title) > MAX_BUTTON_TITLE_LENGTH:
        return title[:MAX_BUTTON_TITLE_LENGTH] + "..."
    return title


def cart_keyboard(snapshot: CartSnapshot) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    if snapshot.is_empty:
        kb.button(text="🛍 Go shopping", callback_data="shop_home")
        return kb.as_markup()

    for i, line in enumerate(snapshot.lines, 1):
        kb.button(text=f"{i}. {_short(line.name)}", callback_data="cart_noop")
        kb.button(text="➖", callback_data=f"cart_dec_{line.product_id}")
        kb.button(text=str(line.quantity), callback_data="cart_noop")
        kb.button(text="➕", callback_data=f"cart_inc_{line.product_id}")
        kb.button(text="🗑", callback_data=f"cart_remove_{line.product_id}")

    kb.button(text="✅ Checkout", callback_data="cart_checkout")
    kb.button(text="🗑 Clear cart", callback_data="cart_clear")

    # Title row, then -/qty/+/remove row per line
    pattern: list[int] = []
    for _ in snapshot.lines:
        pattern.extend([1, 4])
    pattern.extend([1, 1])
    kb.adjust(*pattern)
    return kb.as_markup()


def product_keyboard(product: Product) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    if product.colors:
        for idx, color in enumerate(product.colors):
            kb.button(text=_short(color), callback_data=f"cart_addc_{product.id}_{idx}")
        kb.adjust(2)
    else:
        kb.button(text="🛒 Add to cart", callback_data=f"cart_add_{product.id}")
        kb.row(
            *(
                InlineKeyboardButton(text=f"🛒 ×{qty}", callback_data=f"cart_addn_{product.id}_{qty}")
                for qty in ADD_QUANTITY_CHOICES
            )
        )
    kb.row(InlineKeyboardButton(text="🛒 View cart", callback_data="cart_view"))
    return kb.as_markup()


def continue_keyboard() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="💳 Continue to pay", callback_data="checkout_continue")
    kb.button(text="❌ Cancel", callback_data="checkout_cancel")
    kb.adjust(1)
    return kb.as_markup()


def payment_keyboard(contact_url: str) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="📤 Send receipt on WhatsApp", url=contact_url)
    kb.button(text="✅ I have made payment", callback_data="checkout_paid")
    kb.adjust(1)
    return kb.as_markup()


def shop_keyboard() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="🛒 My cart", callback_data="cart_view")
    return kb.as_markup()
