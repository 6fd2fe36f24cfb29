"""History query tests."""

from datetime import date, datetime

import pytest

from miniapp_order.schemas.history import HistoryOrderStatus
from miniapp_order.schemas.session import UserProfile
from miniapp_order.services.history_service import (
    HistoryQueryError,
    default_history_window,
    query_history,
    status_label,
)

PROFILE = UserProfile(user_id="U1", display_name="Amy")


def _order(order_id: str, created_at: str) -> dict[str, object]:
    return {
        "orderId": order_id,
        "totalAmount": 100,
        "customerName": "Amy",
        "customerPhone": "0912345678",
        "createdAt": created_at,
        "pickupTime": "2025-01-05T12:00:00",
        "items": "Rice x1",
        "status": "confirmed",
    }


def test_results_are_sorted_newest_first(order_client, fake_service) -> None:
    fake_service.responses["getOrders"] = {
        "success": True,
        "data": [
            _order("T2", "2025-01-02T09:00:00"),
            _order("T1", "2025-01-01T09:00:00"),
            _order("T3", "2025-01-03T09:00:00"),
        ],
    }

    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token="tok",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    assert [order.order_id for order in orders] == ["T3", "T2", "T1"]


def test_query_uses_profile_name_and_iso_dates(order_client, fake_service) -> None:
    query_history(
        client=order_client,
        profile=PROFILE,
        identity_token="tok",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    payload = fake_service.requests[0]
    assert payload["customerName"] == "Amy"
    assert payload["idToken"] == "tok"
    assert payload["startDate"] == "2025-01-01"
    assert payload["endDate"] == "2025-01-07"
    assert payload["exactMatch"] is True


def test_empty_result_is_not_an_error(order_client, fake_service) -> None:
    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token=None,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    assert orders == []


def test_missing_profile_fails_without_request(order_client, fake_service) -> None:
    with pytest.raises(HistoryQueryError):
        query_history(
            client=order_client,
            profile=None,
            identity_token="tok",
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 7),
        )

    assert fake_service.requests == []


def test_status_labels_fall_back_to_raw_value() -> None:
    assert status_label(HistoryOrderStatus.CANCELLED_BY_STORE) == "Cancelled by store"
    assert status_label("refunded") == "refunded"


def test_default_window_is_last_week() -> None:
    assert default_history_window(date(2025, 1, 8)) == (date(2025, 1, 1), date(2025, 1, 8))


def test_mixed_offset_and_naive_timestamps_sort_together(order_client, fake_service) -> None:
    fake_service.responses["getOrders"] = {
        "success": True,
        "data": [
            _order("UTC", "2025-01-02T09:00:00Z"),
            _order("LOCAL", "2025-01-05T09:00:00"),
            _order("OLD", "2024-12-28T09:00:00+08:00"),
        ],
    }

    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token=None,
        start_date=date(2024, 12, 25),
        end_date=date(2025, 1, 7),
    )

    assert [order.order_id for order in orders] == ["LOCAL", "UTC", "OLD"]


def test_spreadsheet_timestamps_are_accepted(order_client, fake_service) -> None:
    fake_service.responses["getOrders"] = {
        "success": True,
        "data": [_order("S1", "2025/01/01 09:00:00")],
    }

    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token=None,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    assert len(orders) == 1
    assert orders[0].created_at == "2025/01/01 09:00:00"
    assert orders[0].created_at_time == datetime(2025, 1, 1, 9, 0)


def test_unreadable_timestamp_keeps_order_and_sorts_last(order_client, fake_service) -> None:
    fake_service.responses["getOrders"] = {
        "success": True,
        "data": [
            _order("ODD", "yesterday"),
            _order("T1", "2025-01-01T09:00:00"),
            _order("T2", "2025-01-02T09:00:00"),
        ],
    }

    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token=None,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    assert [order.order_id for order in orders] == ["T2", "T1", "ODD"]
    assert orders[-1].created_at_time is None


def test_fractional_total_is_accepted(order_client, fake_service) -> None:
    fake_service.responses["getOrders"] = {
        "success": True,
        "data": [{**_order("F1", "2025-01-01T09:00:00"), "totalAmount": 99.5}],
    }

    orders = query_history(
        client=order_client,
        profile=PROFILE,
        identity_token=None,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 7),
    )

    assert orders[0].total_amount == 99.5
