"""
FSM states for bot workflows.

Each StatesGroup represents a complete user flow.
"""
from __future__ import annotations

from aiogram.fsm.state import State, StatesGroup


class CheckoutForm(StatesGroup):
    """
    Checkout with bank transfer.

    Flow: cart → full name → email → phone → address → review
          → bank details → "I have made payment"
    """

    full_name = State()
    email = State()
    phone = State()
    address = State()
    review = State()  # Summary shown, waiting for "Continue to pay"
    payment = State()  # Bank details shown, waiting for payment confirmation


__all__ = ["CheckoutForm"]
