"""Shared handler pieces: FSM states."""
from .states import CheckoutForm

__all__ = ["CheckoutForm"]
