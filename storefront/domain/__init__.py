"""Domain package."""

from .cart import CartLine, CartLineInput, CartSnapshot, deserialize_lines, serialize_lines
from .product import Product
from .order import (
    PAYMENT_REFERENCE_BANK_TRANSFER,
    DeliveryDetails,
    OrderRecord,
    OrderStatus,
)
from .vendor import (
    EmbeddedVendor,
    UnknownVendor,
    VendorIdentifier,
    VendorRef,
    parse_vendor_ref,
    vendor_cart_label,
    vendor_display_name,
)

__all__ = [
    # Cart
    "CartLine",
    "CartLineInput",
    "CartSnapshot",
    "serialize_lines",
    "deserialize_lines",
    # Products
    "Product",
    # Orders
    "DeliveryDetails",
    "OrderRecord",
    "OrderStatus",
    "PAYMENT_REFERENCE_BANK_TRANSFER",
    # Vendors
    "VendorRef",
    "VendorIdentifier",
    "EmbeddedVendor",
    "UnknownVendor",
    "parse_vendor_ref",
    "vendor_display_name",
    "vendor_cart_label",
]
