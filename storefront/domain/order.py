"""Order domain types and status values."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any

from .cart import CartLine, CartSnapshot, price_to_json

PAYMENT_REFERENCE_BANK_TRANSFER = "BANK_TRANSFER"

REQUIRED_DELIVERY_FIELDS: tuple[str, ...] = ("full_name", "email", "phone", "address")


class OrderStatus:
    """Order lifecycle statuses stored in orders.status."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = (PENDING, COMPLETED, CANCELLED)


@dataclass(frozen=True, slots=True)
class DeliveryDetails:
    """Shopper contact and address; presence is the only rule."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_DELIVERY_FIELDS if not getattr(self, name).strip()]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def with_field(self, name: str, value: str) -> DeliveryDetails:
        if name not in {f.name for f in fields(self)}:
            raise KeyError(name)
        return replace(self, **{name: value if value is not None else ""})


@dataclass(frozen=True, slots=True)
class OrderRecord:
    """Order row written once at payment confirmation."""

    items: tuple[CartLine, ...]
    total_amount: Decimal
    delivery: DeliveryDetails
    payment_reference: str = PAYMENT_REFERENCE_BANK_TRANSFER
    status: str = OrderStatus.PENDING
    idempotency_key: str | None = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: CartSnapshot,
        delivery: DeliveryDetails,
        *,
        idempotency_key: str | None = None,
    ) -> OrderRecord:
        return cls(
            items=snapshot.lines,
            total_amount=snapshot.subtotal,
            delivery=delivery,
            idempotency_key=idempotency_key,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "user_email": self.delivery.email,
            "user_name": self.delivery.full_name,
            "user_phone": self.delivery.phone,
            "user_address": self.delivery.address,
            "items": [line.to_dict() for line in self.items],
            "total_amount": price_to_json(self.total_amount),
            "payment_reference": self.payment_reference,
            "status": self.status,
        }
        if self.idempotency_key:
            payload["idempotency_key"] = self.idempotency_key
        return payload
