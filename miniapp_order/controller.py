"""Application shell shared by the Streamlit pages.

Holds everything the original single-page app keeps in component state:
session, menu, cart, order form, current view, the last confirmed order,
history results and the visible notification. Service errors are converted
to notifications here so nothing escapes to the page script.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum

from miniapp_order.schemas.history import HistoryOrder
from miniapp_order.schemas.menu import Cart, MenuItem
from miniapp_order.schemas.order import ConfirmedOrder, OrderForm, OrderTotals, ValidationResult
from miniapp_order.schemas.session import SessionState, StatusLevel
from miniapp_order.services import cart_service
from miniapp_order.services.history_service import HistoryQueryError, default_history_window, query_history
from miniapp_order.services.menu_service import load_menu
from miniapp_order.services.notifications import Notifier
from miniapp_order.services.order_client import OrderServiceClient, OrderServiceError
from miniapp_order.services.order_form import default_pickup
from miniapp_order.services.order_service import OrderValidationError, submit_order
from miniapp_order.services.pricing import compute_totals
from miniapp_order.services.session_gate import SessionGate
from miniapp_order.utils.time import current_local_datetime

logger = logging.getLogger(__name__)

ORDER_SUCCESS_MESSAGE: str = "Order submitted successfully!"
UNKNOWN_ERROR_MESSAGE: str = "Unknown error"


class View(str, Enum):
    ORDER = "order"
    SUCCESS = "success"
    HISTORY = "history"


class OrderController:
    """Coordinates the ordering workflow for one user session."""

    def __init__(
        self,
        *,
        gate: SessionGate,
        client: OrderServiceClient,
        notifier: Notifier | None = None,
        now: datetime | None = None,
    ) -> None:
        self.gate = gate
        self.client = client
        self.notifier = notifier or Notifier()
        self.view: View = View.ORDER
        self.menu: list[MenuItem] = []
        self.is_menu_loading = True
        self.cart: Cart = {}
        self.form = OrderForm()
        self.validation = ValidationResult()
        self.submitted_order: ConfirmedOrder | None = None
        self.is_submitting = False
        # None until the first search finishes; an empty list is a real result.
        self.history: list[HistoryOrder] | None = None
        self.is_searching = False
        self._was_logged_in = False

        current = now or current_local_datetime()
        self.form.pickup_date, self.form.pickup_time = default_pickup(current)
        self.history_start, self.history_end = default_history_window(current.date())

    @property
    def session(self) -> SessionState:
        return self.gate.state

    def start(self) -> SessionState:
        """Initialize the session and load the menu on the logged-in edge."""
        state = self.gate.initialize()
        self._on_session_change(state)
        return state

    def login(self) -> SessionState:
        state = self.gate.login()
        self._on_session_change(state)
        return state

    def _on_session_change(self, state: SessionState) -> None:
        if state.is_logged_in and not self._was_logged_in:
            self._was_logged_in = True
            if state.profile is not None:
                self.form.customer_name = state.profile.display_name
            self.is_menu_loading = True
            self.menu = load_menu(self.client, self.notifier)
            self.is_menu_loading = False
        elif not state.is_logged_in:
            self._was_logged_in = False

    def change_quantity(self, item_name: str, delta: int) -> None:
        self.cart = cart_service.update_cart(self.cart, self.menu, item_name, delta)

    def quantity_of(self, item_name: str) -> int:
        return cart_service.get_quantity(self.cart, item_name)

    def clear_cart(self, *, confirmed: bool) -> None:
        self.cart = cart_service.clear_cart(self.cart, confirmed=confirmed)

    @property
    def totals(self) -> OrderTotals:
        return compute_totals(self.cart, self.form.delivery_address)

    def submit(self, now: datetime | None = None) -> ConfirmedOrder | None:
        """Submit the current form; returns the confirmed order or None on failure."""
        if self.is_submitting:
            return None

        self.is_submitting = True
        try:
            confirmed = submit_order(
                client=self.client,
                form=self.form,
                cart=self.cart,
                identity_token=self.session.identity_token,
                now=now,
            )
        except OrderValidationError as exc:
            self.validation = exc.result
            if exc.result.general_errors:
                self.notifier.show(exc.result.general_errors[-1], StatusLevel.ERROR)
            return None
        except OrderServiceError as exc:
            self.validation = ValidationResult()
            self.notifier.show(f"Order submission failed: {exc.message or UNKNOWN_ERROR_MESSAGE}", StatusLevel.ERROR)
            return None
        except Exception:
            logger.exception("[ORDER] Unexpected submission failure")
            self.notifier.show(f"Order submission failed: {UNKNOWN_ERROR_MESSAGE}", StatusLevel.ERROR)
            return None
        finally:
            self.is_submitting = False

        self.validation = ValidationResult()
        self.submitted_order = confirmed
        self.view = View.SUCCESS
        self.notifier.show(ORDER_SUCCESS_MESSAGE, StatusLevel.SUCCESS)
        return confirmed

    def new_order(self, now: datetime | None = None) -> None:
        """Leave the confirmation view and start over with an empty cart and form."""
        profile = self.session.profile
        self.submitted_order = None
        self.cart = {}
        self.form = OrderForm(customer_name=profile.display_name if profile is not None else "")
        self.form.pickup_date, self.form.pickup_time = default_pickup(now or current_local_datetime())
        self.view = View.ORDER

    def show_history(self) -> None:
        self.view = View.HISTORY

    def back_to_order(self) -> None:
        self.view = View.ORDER

    @property
    def has_searched(self) -> bool:
        return self.history is not None

    def search_history(self, start_date: date | None = None, end_date: date | None = None) -> list[HistoryOrder] | None:
        """Run a history search; failures clear previous results."""
        if self.is_searching:
            return self.history
        if start_date is not None:
            self.history_start = start_date
        if end_date is not None:
            self.history_end = end_date

        self.is_searching = True
        try:
            orders = query_history(
                client=self.client,
                profile=self.session.profile,
                identity_token=self.session.identity_token,
                start_date=self.history_start,
                end_date=self.history_end,
            )
        except HistoryQueryError as exc:
            self.notifier.show(str(exc), StatusLevel.ERROR)
            return self.history
        except OrderServiceError as exc:
            logger.warning("[HISTORY] Query failed: %s", exc.message)
            self.history = []
            self.notifier.show(f"Query failed: {exc.message or UNKNOWN_ERROR_MESSAGE}", StatusLevel.ERROR)
            return self.history
        except Exception:
            logger.exception("[HISTORY] Unexpected query failure")
            self.history = []
            self.notifier.show(f"Query failed: {UNKNOWN_ERROR_MESSAGE}", StatusLevel.ERROR)
            return self.history
        finally:
            self.is_searching = False

        self.history = orders
        self.notifier.show(f"Found {len(orders)} orders", StatusLevel.SUCCESS)
        return self.history
