"""Order submission pipeline: validate, normalize, send, reconcile."""

from __future__ import annotations

import logging
from datetime import datetime

from miniapp_order.core.config import settings
from miniapp_order.schemas.menu import Cart
from miniapp_order.schemas.order import (
    ConfirmedOrder,
    OrderDraft,
    OrderForm,
    OrderItemPayload,
    OrderPayload,
    ValidationResult,
)
from miniapp_order.services.order_client import OrderServiceClient
from miniapp_order.services.order_form import full_pickup_time, validate_order_form
from miniapp_order.services.pricing import compute_totals
from miniapp_order.utils.time import current_local_datetime, epoch_millis

logger = logging.getLogger(__name__)


class OrderValidationError(Exception):
    """Raised when the order form fails validation; no request was sent."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__("Order form is invalid")
        self.result = result


def build_draft(form: OrderForm, cart: Cart) -> OrderDraft:
    """Snapshot the form and cart into an order draft."""
    return OrderDraft(
        customer_name=form.customer_name,
        customer_phone=form.customer_phone,
        items=list(cart.values()),
        pickup_time=full_pickup_time(form.pickup_date, form.pickup_time),
        delivery_address=form.delivery_address,
        notes=form.notes,
    )


def normalize_draft(draft: OrderDraft) -> OrderPayload:
    """Trim free-text fields and reduce lines to name, quantity and price."""
    return OrderPayload(
        customer_name=draft.customer_name.strip(),
        customer_phone=draft.customer_phone.strip(),
        items=[
            OrderItemPayload(name=line.name, quantity=line.quantity, price=line.price)
            for line in draft.items
        ],
        pickup_time=draft.pickup_time,
        delivery_address=draft.delivery_address.strip(),
        notes=draft.notes.strip(),
    )


def placeholder_order_id(now: datetime | None = None) -> str:
    """Return the local id used when the service does not assign one."""
    return f"TEST_{epoch_millis(now)}"


def submit_order(
    *,
    client: OrderServiceClient,
    form: OrderForm,
    cart: Cart,
    identity_token: str | None,
    now: datetime | None = None,
) -> ConfirmedOrder:
    """Validate and submit an order, returning the confirmed record.

    Raises `OrderValidationError` before any network call when the form is
    invalid, and `OrderServiceError` when the service call fails.
    """
    current: datetime = now or current_local_datetime()
    validation: ValidationResult = validate_order_form(form, cart, now=current)
    if not validation.is_valid:
        raise OrderValidationError(validation)

    draft: OrderDraft = build_draft(form, cart)
    local_total: int = compute_totals(cart, draft.delivery_address).total
    payload: OrderPayload = normalize_draft(draft)
    confirmation = client.create_order(payload, identity_token)

    order_id: str = confirmation.order_id or placeholder_order_id()
    total_amount: int | float = confirmation.total_amount if confirmation.total_amount is not None else local_total
    logger.info("[ORDER] Order %s submitted, total=%s", order_id, total_amount)
    return ConfirmedOrder(
        customer_name=payload.customer_name,
        customer_phone=payload.customer_phone,
        items=draft.items,
        pickup_time=draft.pickup_time,
        delivery_address=payload.delivery_address,
        notes=payload.notes,
        order_id=order_id,
        total_amount=total_amount,
    )


def format_pickup_display(pickup_time: str) -> str:
    """Render a `YYYY-MM-DDTHH:MM:SS` pickup string for people."""
    try:
        return datetime.fromisoformat(pickup_time).strftime("%Y/%m/%d %H:%M")
    except ValueError:
        return pickup_time


def build_share_text(order: ConfirmedOrder) -> str:
    """Return the copyable order confirmation summary."""
    fulfilment = f"Delivery address: {order.delivery_address}" if order.delivery_address else "Pickup"
    opening = settings.business_open_time.strftime("%H:%M")
    closing = settings.business_close_time.strftime("%H:%M")
    return "\n".join(
        [
            f"🍽️ {settings.shop_name} - Order confirmation",
            "",
            f"📋 Order number: {order.order_id}",
            f"👤 Customer: {order.customer_name}",
            f"📞 Phone: {order.customer_phone}",
            "",
            f"💰 Total: ${order.total_amount}",
            f"⏰ Pickup time: {format_pickup_display(order.pickup_time)}",
            f"📍 {fulfilment}",
            f"📝 Notes: {order.notes or 'None'}",
            "",
            f"📍 Pickup address: {settings.shop_address}",
            f"🕒 Opening hours: {opening}-{closing}",
            f"📞 Shop phone: {settings.shop_phone}",
        ]
    )
