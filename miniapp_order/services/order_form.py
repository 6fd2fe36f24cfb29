"""Order form rules: phone format, pickup slots and lead time."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta

from miniapp_order.core.config import settings
from miniapp_order.schemas.menu import Cart
from miniapp_order.schemas.order import OrderForm, ValidationResult

PHONE_PATTERN: re.Pattern[str] = re.compile(r"09\d{8}")

MISSING_NAME_MESSAGE: str = "Could not read your LINE display name"
INVALID_PHONE_MESSAGE: str = "Please enter a valid 10-digit mobile number starting with 09"
MISSING_PICKUP_MESSAGE: str = "Please choose a pickup date and time"
PICKUP_TOO_SOON_MESSAGE: str = "Pickup time must be at least 30 minutes from now"
EMPTY_CART_MESSAGE: str = "Please select at least one item"


def is_valid_phone(value: str) -> bool:
    """Return True for local mobile numbers: 09 followed by 8 digits."""
    return PHONE_PATTERN.fullmatch(value) is not None


def full_pickup_time(pickup_date: date | None, pickup_time: time | None) -> str:
    """Combine date and time into the local `YYYY-MM-DDTHH:MM:00` string, or ''."""
    if pickup_date is None or pickup_time is None:
        return ""
    return f"{pickup_date.isoformat()}T{pickup_time.strftime('%H:%M')}:00"


def earliest_pickup(now: datetime) -> datetime:
    """Return the earliest acceptable pickup moment for `now`."""
    return now + timedelta(minutes=settings.min_pickup_lead_minutes)


def check_pickup(pickup_date: date | None, pickup_time: time | None, now: datetime) -> str | None:
    """Return the pickup error message, or None when the pickup is acceptable."""
    if pickup_date is None or pickup_time is None:
        return MISSING_PICKUP_MESSAGE
    if datetime.combine(pickup_date, pickup_time) < earliest_pickup(now):
        return PICKUP_TOO_SOON_MESSAGE
    return None


def validate_order_form(form: OrderForm, cart: Cart, *, now: datetime) -> ValidationResult:
    """Validate every rule independently and collect all errors."""
    result = ValidationResult()

    if not form.customer_name.strip():
        result.general_errors.append(MISSING_NAME_MESSAGE)

    if not is_valid_phone(form.customer_phone):
        result.phone_error = INVALID_PHONE_MESSAGE

    result.time_error = check_pickup(form.pickup_date, form.pickup_time, now)

    if not cart:
        result.general_errors.append(EMPTY_CART_MESSAGE)

    return result


def default_pickup(now: datetime) -> tuple[date, time]:
    """Return the pre-filled pickup date and time.

    The time is `now` plus 30 minutes with the minute rounded up to the next
    half hour. The date stays on today's calendar date.
    """
    shifted: datetime = (now + timedelta(minutes=30)).replace(second=0, microsecond=0)
    minutes: int = math.ceil(shifted.minute / 30) * 30
    if minutes >= 60:
        shifted = shifted.replace(minute=0) + timedelta(hours=1)
    else:
        shifted = shifted.replace(minute=minutes)
    return now.date(), shifted.time()


def date_options(today: date) -> list[tuple[date, str]]:
    """Return the selectable pickup dates with month/day/weekday labels."""
    options: list[tuple[date, str]] = []
    for offset in range(settings.pickup_days):
        day = today + timedelta(days=offset)
        options.append((day, f"{day:%B} {day.day} ({day:%a})"))
    return options


def time_options() -> list[time]:
    """Return every pickup slot within business hours, closing time included."""
    slots: list[time] = []
    current = datetime.combine(date.min, settings.business_open_time)
    closing = datetime.combine(date.min, settings.business_close_time)
    step = timedelta(minutes=settings.pickup_slot_minutes)
    while current <= closing:
        slots.append(current.time())
        current += step
    return slots
