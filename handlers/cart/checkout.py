"""Checkout handlers: delivery form, bank details and payment confirmation."""
from __future__ import annotations

import logging

from aiogram import F, Router, types
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State

from handlers.common.states import CheckoutForm
from storefront.core.navigation import Route
from storefront.interfaces.bot.keyboards import continue_keyboard, payment_keyboard
from storefront.interfaces.bot.presenters.cart_messages import (
    bank_details_text,
    empty_field_text,
    field_prompt,
    review_text,
    submit_failed_text,
    submit_in_progress_text,
)

from .common import get_registry

logger = logging.getLogger(__name__)

CHECKOUT_EXPIRED_TEXT = "⌛ This checkout has expired. Open /cart to start again."
DETAILS_MISSING_TEXT = "Please fill in all delivery details first."

# state -> (delivery field it collects, next state)
FORM_STEPS: dict[str | None, tuple[str, State]] = {
    CheckoutForm.full_name.state: ("full_name", CheckoutForm.email),
    CheckoutForm.email.state: ("email", CheckoutForm.phone),
    CheckoutForm.phone.state: ("phone", CheckoutForm.address),
    CheckoutForm.address.state: ("address", CheckoutForm.review),
}

async def cart_checkout(callback: types.CallbackQuery, state: FSMContext) -> None:
    if not callback.message:
        await callback.answer()
        return

    user_id = callback.from_user.id
    flow = get_registry().start_checkout(user_id)
    if not await flow.enter():
        # The flow already sent the shopper back to the cart.
        await state.clear()
        await callback.answer()
        return

    await state.set_state(CheckoutForm.full_name)
    await callback.message.answer(field_prompt("full_name"), parse_mode="HTML")
    await callback.answer()


async def checkout_field(message: types.Message, state: FSMContext) -> None:
    registry = get_registry()
    user_id = message.from_user.id
    flow = registry.current_checkout(user_id)
    if flow is None:
        await state.clear()
        await message.answer(CHECKOUT_EXPIRED_TEXT)
        return

    step = FORM_STEPS.get(await state.get_state())
    if step is None:
        return
    field, next_state = step

    value = (message.text or "").strip()
    if not value:
        await message.answer(empty_field_text(field), parse_mode="HTML")
        return

    flow.update_field(field, value)
    await state.set_state(next_state)

    if next_state is CheckoutForm.review:
        snapshot = registry.get(user_id).cart.snapshot()
        await message.answer(
            review_text(snapshot, flow.delivery, registry.settings.currency_symbol),
            parse_mode="HTML",
            reply_markup=continue_keyboard(),
        )
    else:
        await message.answer(field_prompt(FORM_STEPS[next_state.state][0]), parse_mode="HTML")


async def checkout_continue(callback: types.CallbackQuery, state: FSMContext) -> None:
    registry = get_registry()
    flow = registry.current_checkout(callback.from_user.id)
    if flow is None or not callback.message:
        await callback.answer(CHECKOUT_EXPIRED_TEXT, show_alert=True)
        return

    if not flow.continue_to_payment():
        await callback.answer(DETAILS_MISSING_TEXT, show_alert=True)
        return

    instructions = flow.payment_instructions
    await state.set_state(CheckoutForm.payment)
    await callback.message.answer(
        bank_details_text(instructions, registry.settings.currency_symbol),
        parse_mode="HTML",
        reply_markup=payment_keyboard(instructions.contact_url),
    )
    await callback.answer()


async def checkout_paid(callback: types.CallbackQuery, state: FSMContext) -> None:
    registry = get_registry()
    user_id = callback.from_user.id
    flow = registry.current_checkout(user_id)
    if flow is None or not callback.message:
        await callback.answer(CHECKOUT_EXPIRED_TEXT, show_alert=True)
        return

    if flow.submitting:
        await callback.answer(submit_in_progress_text(), show_alert=True)
        return

    # No second tap on the same button while the order is being written.
    try:
        await callback.message.edit_reply_markup(reply_markup=None)
    except TelegramAPIError as exc:
        logger.debug("Payment keyboard not removed: %s", exc)

    result = await flow.confirm_payment()
    if result.ok:
        await state.clear()
        registry.end_checkout(user_id)
        await callback.answer()
        return

    if result.error_key == "in_progress":
        await callback.answer(submit_in_progress_text(), show_alert=True)
        return

    if result.error_key == "persistence_error":
        await callback.message.answer(
            submit_failed_text(result.message),
            parse_mode="HTML",
            reply_markup=payment_keyboard(registry.settings.bank.contact_url),
        )
        await callback.answer()
        return

    logger.warning("Payment confirmation refused for user %s: %s", user_id, result.error_key)
    await callback.answer(DETAILS_MISSING_TEXT, show_alert=True)


async def checkout_cancel(callback: types.CallbackQuery, state: FSMContext) -> None:
    registry = get_registry()
    await state.clear()
    registry.end_checkout(callback.from_user.id)
    await registry.navigator_for(callback.from_user.id).navigate(Route.CART)
    await callback.answer()


def register(router: Router) -> None:
    """Register checkout handlers on the given router."""
    router.callback_query.register(cart_checkout, F.data == "cart_checkout")
    router.message.register(
        checkout_field,
        StateFilter(
            CheckoutForm.full_name,
            CheckoutForm.email,
            CheckoutForm.phone,
            CheckoutForm.address,
        ),
    )
    router.callback_query.register(checkout_continue, F.data == "checkout_continue")
    router.callback_query.register(checkout_paid, F.data == "checkout_paid")
    router.callback_query.register(checkout_cancel, F.data == "checkout_cancel")
