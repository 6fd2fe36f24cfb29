"""Past order lookup for the signed-in customer."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from miniapp_order.core.config import settings
from miniapp_order.schemas.history import HistoryOrder, HistoryOrderStatus
from miniapp_order.schemas.session import UserProfile
from miniapp_order.services.order_client import OrderServiceClient

logger = logging.getLogger(__name__)

MISSING_PROFILE_MESSAGE: str = "Could not read your LINE profile, please try again later"

HISTORY_STATUS_LABELS: dict[HistoryOrderStatus, str] = {
    HistoryOrderStatus.PENDING_CUSTOMER: "Awaiting customer",
    HistoryOrderStatus.PENDING_STORE: "Awaiting store",
    HistoryOrderStatus.CONFIRMED: "Confirmed",
    HistoryOrderStatus.COMPLETED: "Completed",
    HistoryOrderStatus.CANCELLED_BY_CUSTOMER: "Cancelled by customer",
    HistoryOrderStatus.CANCELLED_BY_STORE: "Cancelled by store",
}


class HistoryQueryError(Exception):
    """Raised when a history query cannot be attempted."""


def status_label(status: HistoryOrderStatus | str) -> str:
    """Return the display label for a status, falling back to the raw value."""
    if isinstance(status, HistoryOrderStatus):
        return HISTORY_STATUS_LABELS[status]
    return str(status)


def default_history_window(today: date) -> tuple[date, date]:
    """Return the default search range ending today."""
    return today - timedelta(days=settings.history_lookback_days), today


def _recency_key(order: HistoryOrder) -> tuple[bool, datetime]:
    created = order.created_at_time
    return created is not None, created or datetime.min


def sort_by_recency(orders: list[HistoryOrder]) -> list[HistoryOrder]:
    """Return orders newest first by creation time; unparseable timestamps go last."""
    return sorted(orders, key=_recency_key, reverse=True)


def query_history(
    *,
    client: OrderServiceClient,
    profile: UserProfile | None,
    identity_token: str | None,
    start_date: date,
    end_date: date,
) -> list[HistoryOrder]:
    """Fetch the customer's orders created in [start_date, end_date], newest first."""
    if profile is None:
        raise HistoryQueryError(MISSING_PROFILE_MESSAGE)

    orders: list[HistoryOrder] = client.get_orders(
        customer_name=profile.display_name,
        id_token=identity_token,
        start_date=start_date.isoformat(),
        end_date=end_date.isoformat(),
    )
    logger.info("[HISTORY] %s orders found for user_id=%s", len(orders), profile.user_id)
    return sort_by_recency(orders)
