"""Vendor references as they come back from loosely typed product rows.

A product row's ``vendors`` column is a bare identifier string, an embedded
``{id, business_name}`` object, a one-element list of such objects, or
missing. It is resolved here once instead of being type-checked at every
call site.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from storefront.core.constants import UNKNOWN_VENDOR_LABEL


@dataclass(frozen=True, slots=True)
class VendorIdentifier:
    value: str


@dataclass(frozen=True, slots=True)
class EmbeddedVendor:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class UnknownVendor:
    pass


VendorRef = Union[VendorIdentifier, EmbeddedVendor, UnknownVendor]


def _parse_embedded(raw: Mapping[str, Any]) -> VendorRef:
    name = raw.get("business_name")
    if not isinstance(name, str):
        name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return UnknownVendor()
    vendor_id = raw.get("id")
    return EmbeddedVendor(id=str(vendor_id) if vendor_id else "", name=name.strip())


def parse_vendor_ref(raw: Any) -> VendorRef:
    """Map an untyped ``vendors`` value to a VendorRef."""
    if isinstance(raw, str):
        cleaned = raw.strip()
        return VendorIdentifier(cleaned) if cleaned else UnknownVendor()
    if isinstance(raw, Mapping):
        return _parse_embedded(raw)
    if isinstance(raw, (list, tuple)):
        return parse_vendor_ref(raw[0]) if raw else UnknownVendor()
    return UnknownVendor()


def vendor_display_name(ref: VendorRef) -> str:
    if isinstance(ref, VendorIdentifier):
        return ref.value
    if isinstance(ref, EmbeddedVendor):
        return ref.name
    return UNKNOWN_VENDOR_LABEL


def vendor_cart_label(ref: VendorRef, vendor_id: str | None = None) -> str:
    """Label stored on a cart line: the vendor id when known, else the display name."""
    if vendor_id:
        return str(vendor_id)
    return vendor_display_name(ref)
