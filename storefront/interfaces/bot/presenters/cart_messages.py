"""Message texts for cart, checkout and thank-you screens.

All texts are Telegram HTML. Anything typed by a shopper or read from the
catalog goes through ``esc`` first.
"""
from __future__ import annotations

import html
from decimal import Decimal
from typing import Any

from storefront.application.checkout import PaymentInstructions
from storefront.core.constants import DEFAULT_CURRENCY_SYMBOL
from storefront.domain.cart import CartSnapshot
from storefront.domain.order import DeliveryDetails
from storefront.domain.product import Product
from storefront.domain.vendor import vendor_display_name

FIELD_PROMPTS = {
    "full_name": "👤 Enter your <b>full name</b>:",
    "email": "📧 Enter your <b>email address</b>:",
    "phone": "📞 Enter your <b>phone number</b>:",
    "address": "📍 Enter your <b>delivery address</b>:",
}

FIELD_LABELS = {
    "full_name": "Name",
    "email": "Email",
    "phone": "Phone",
    "address": "Address",
}


def esc(val: Any) -> str:
    if val is None:
        return ""
    return html.escape(str(val))


def format_money(amount: Decimal | int, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """``₦1,234`` for whole amounts, ``₦1,234.50`` otherwise."""
    value = Decimal(amount)
    if value == value.to_integral_value():
        return f"{symbol}{int(value):,}"
    return f"{symbol}{value.quantize(Decimal('0.01')):,}"


def welcome_text() -> str:
    return (
        "🛍 <b>Welcome to TalkToShop!</b>\n\n"
        "Open a product link from the shop to add it to your cart, "
        "then use /cart to check out."
    )


def empty_cart_text() -> str:
    return "🛒 Your cart is empty\n\nBrowse the shop and add something you like!"


def _line_rows(snapshot: CartSnapshot, symbol: str) -> list[str]:
    rows: list[str] = []
    for i, line in enumerate(snapshot.lines, 1):
        rows.append(f"\n<b>{i}. {esc(line.name)}</b>")
        if line.vendor_label:
            rows.append(f"   🏪 {esc(line.vendor_label)}")
        if line.colors:
            rows.append(f"   🎨 {esc(', '.join(line.colors))}")
        rows.append(
            f"   {line.quantity} × {format_money(line.unit_price, symbol)}"
            f" = <b>{format_money(line.line_total, symbol)}</b>"
        )
    return rows


def cart_text(snapshot: CartSnapshot, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    if snapshot.is_empty:
        return empty_cart_text()

    rows = [f"🛒 <b>Your cart</b> ({snapshot.item_count} items)"]
    rows.extend(_line_rows(snapshot, symbol))
    rows.append("\n" + "─" * 25)
    rows.append(f"💵 <b>Subtotal: {format_money(snapshot.subtotal, symbol)}</b>")
    return "\n".join(rows)


def product_text(product: Product, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    rows = [
        f"<b>{esc(product.name)}</b>",
        f"💰 {format_money(product.price, symbol)}",
        f"🏪 {esc(vendor_display_name(product.vendor))}",
    ]
    if product.colors:
        rows.append("\nPick a color:")
    return "\n".join(rows)


def added_to_cart_text(name: str, quantity: int) -> str:
    # Shown in a callback alert, which is plain text.
    return f"✅ {name} added to cart (now {quantity})"


def field_prompt(name: str) -> str:
    return FIELD_PROMPTS[name]


def empty_field_text(name: str) -> str:
    return f"⚠️ {FIELD_LABELS[name]} cannot be empty.\n\n{FIELD_PROMPTS[name]}"


def review_text(
    snapshot: CartSnapshot,
    delivery: DeliveryDetails,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    rows = ["📋 <b>Review your order</b>"]
    rows.extend(_line_rows(snapshot, symbol))
    rows.append("\n" + "─" * 25)
    rows.append(f"💵 <b>Total: {format_money(snapshot.subtotal, symbol)}</b>\n")
    for name, label in FIELD_LABELS.items():
        rows.append(f"{label}: {esc(getattr(delivery, name))}")
    return "\n".join(rows)


def bank_details_text(
    instructions: PaymentInstructions, symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> str:
    return (
        "🏦 <b>Pay by bank transfer</b>\n\n"
        f"Amount: <b>{format_money(instructions.amount, symbol)}</b>\n"
        f"Account name: {esc(instructions.account_name)}\n"
        f"Bank: {esc(instructions.bank_name)}\n"
        f"Account number: <code>{esc(instructions.account_number)}</code>\n\n"
        "Send your payment receipt on WhatsApp, then tap "
        "<b>I have made payment</b>."
    )


def submit_failed_text(message: str | None = None) -> str:
    text = "❌ We could not record your order. Please try again."
    if message:
        text += f"\n\n<i>{esc(message)}</i>"
    return text


def submit_in_progress_text() -> str:
    return "⏳ Your order is already being submitted..."


def thank_you_text(
    snapshot: CartSnapshot,
    order_id: str | None = None,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    rows = ["🎉 <b>Thank you for your order!</b>"]
    if order_id:
        rows.append(f"Order: <code>{esc(order_id)}</code>")
    if not snapshot.is_empty:
        rows.extend(_line_rows(snapshot, symbol))
        rows.append("\n" + "─" * 25)
        rows.append(f"💵 <b>Total: {format_money(snapshot.subtotal, symbol)}</b>")
    rows.append("\nWe will confirm your payment and contact you about delivery.")
    return "\n".join(rows)


def cart_cleared_text() -> str:
    return "🗑 Cart cleared"
