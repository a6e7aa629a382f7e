"""Use case: collect delivery details and place a bank-transfer order.

States::

    COLLECTING --continue_to_payment()--> CONFIRMING --confirm_payment() ok--> SUBMITTED
                                              ^                |
                                              +---- failure ---+

``confirm_payment`` issues exactly one insert per call and refuses to start
a second one while the first is in flight. There is no automatic retry: the
shopper presses the button again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable

from storefront.core.cart_store import CartStore
from storefront.core.config import BankTransferConfig
from storefront.core.constants import DEFAULT_CART_CLEAR_DELAY_SECONDS, DEFAULT_ORDERS_TABLE
from storefront.core.deferred import DeferredAction
from storefront.core.exceptions import PersistenceException
from storefront.core.navigation import Navigator, Route
from storefront.domain.order import REQUIRED_DELIVERY_FIELDS, DeliveryDetails, OrderRecord
from storefront.integrations.auth import AuthState
from storefront.integrations.rest_tables import TableClient

logger = logging.getLogger(__name__)

IDEMPOTENCY_COLUMN = "idempotency_key"


class CheckoutState(str, Enum):
    COLLECTING = "collecting"
    CONFIRMING = "confirming"
    SUBMITTED = "submitted"


@dataclass(frozen=True, slots=True)
class PaymentInstructions:
    account_name: str
    bank_name: str
    account_number: str
    contact_url: str
    amount: Decimal


@dataclass
class SubmitResult:
    ok: bool
    error_key: str | None = None
    order_id: str | None = None
    message: str | None = None


class CheckoutFlow:
    def __init__(
        self,
        cart: CartStore,
        orders: TableClient,
        navigator: Navigator,
        *,
        bank: BankTransferConfig,
        clear_delay: float = DEFAULT_CART_CLEAR_DELAY_SECONDS,
        orders_table: str = DEFAULT_ORDERS_TABLE,
        idempotency_tokens: Callable[[], str] | None = None,
        auth: AuthState | None = None,
    ):
        self._cart = cart
        self._orders = orders
        self._navigator = navigator
        self._bank = bank
        self._clear_delay = clear_delay
        self._orders_table = orders_table
        self._idempotency_tokens = idempotency_tokens
        self._auth = auth

        self.state = CheckoutState.COLLECTING
        self.delivery = DeliveryDetails()
        self.submitting = False
        self.last_error: str | None = None
        self.pending_clear: DeferredAction | None = None
        self._entered: bool | None = None
        self._idempotency_key: str | None = None

    # ---- entry ----------------------------------------------------------

    async def enter(self) -> bool:
        """Empty-cart guard, evaluated once. False means we redirected to the cart."""
        if self._entered is not None:
            return self._entered
        if self._cart.is_empty:
            logger.info("Checkout entered with empty cart %s, redirecting", self._cart.key)
            self._entered = False
            await self._navigator.navigate(Route.CART)
            return False
        self._entered = True
        return True

    # ---- collecting -----------------------------------------------------

    @property
    def can_continue(self) -> bool:
        return self.state == CheckoutState.COLLECTING and self.delivery.is_complete

    def update_field(self, name: str, value: str) -> bool:
        """Set one delivery field; returns the recomputed ``can_continue``."""
        if name not in REQUIRED_DELIVERY_FIELDS:
            raise KeyError(name)
        if self.state == CheckoutState.COLLECTING:
            self.delivery = self.delivery.with_field(name, value)
        return self.can_continue

    def continue_to_payment(self) -> bool:
        if not self.can_continue:
            return False
        self.state = CheckoutState.CONFIRMING
        return True

    @property
    def payment_instructions(self) -> PaymentInstructions | None:
        if self.state != CheckoutState.CONFIRMING:
            return None
        return PaymentInstructions(
            account_name=self._bank.account_name,
            bank_name=self._bank.bank_name,
            account_number=self._bank.account_number,
            contact_url=self._bank.contact_url,
            amount=self._cart.subtotal,
        )

    # ---- submission -----------------------------------------------------

    def _next_idempotency_key(self) -> str | None:
        if self._idempotency_tokens is None:
            return None
        # One token per flow so a manual retry after an ambiguous failure dedupes.
        if self._idempotency_key is None:
            self._idempotency_key = self._idempotency_tokens()
        return self._idempotency_key

    async def confirm_payment(self) -> SubmitResult:
        """Shopper says the transfer is done: write the order once."""
        if self.state != CheckoutState.CONFIRMING:
            return SubmitResult(False, "not_confirming")
        if self.submitting:
            return SubmitResult(False, "in_progress")
        if not self.delivery.is_complete:
            return SubmitResult(False, "incomplete")

        self.submitting = True
        try:
            record = OrderRecord.from_snapshot(
                self._cart.snapshot(),
                self.delivery,
                idempotency_key=self._next_idempotency_key(),
            )
            on_conflict = IDEMPOTENCY_COLUMN if record.idempotency_key else None
            try:
                row = await self._orders.insert(
                    self._orders_table, record.to_payload(), on_conflict=on_conflict
                )
            except PersistenceException as exc:
                self.last_error = exc.message
                logger.error("Order write failed for cart %s: %s", self._cart.key, exc.message)
                return SubmitResult(False, "persistence_error", message=exc.message)

            self.last_error = None
            self.state = CheckoutState.SUBMITTED
            order_id = str(row["id"]) if row.get("id") is not None else None
            logger.info(
                "Order %s placed (%s) total=%s items=%s",
                order_id or "<duplicate ignored>",
                "guest" if self._auth is None or self._auth.is_guest else "signed-in",
                record.total_amount,
                len(record.items),
            )

            self.pending_clear = DeferredAction(self._cart.clear, self._clear_delay).start()
            params: dict[str, Any] = {
                "order_id": order_id,
                "on_rendered": self.pending_clear.acknowledge,
            }
            await self._navigator.navigate(Route.THANK_YOU, **params)
            return SubmitResult(True, order_id=order_id)
        finally:
            self.submitting = False
