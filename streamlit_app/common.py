"""Shared helpers for the Streamlit ordering pages."""

import streamlit as st

from miniapp_order.controller import OrderController
from miniapp_order.core.config import settings
from miniapp_order.schemas.session import StatusLevel
from miniapp_order.services.identity import build_identity_provider
from miniapp_order.services.notifications import Notifier
from miniapp_order.services.order_client import OrderServiceClient
from miniapp_order.services.session_gate import SessionGate

CONTROLLER_KEY = "order_controller"


def get_controller() -> OrderController:
    """Return the per-browser-session controller, creating and starting it once."""
    controller: OrderController | None = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        provider = build_identity_provider(st.query_params.get("id_token"))
        controller = OrderController(
            gate=SessionGate(provider, settings.liff_app_id),
            client=OrderServiceClient(),
            notifier=Notifier(),
        )
        st.session_state[CONTROLLER_KEY] = controller
        controller.start()
    return controller


def render_status(message: str, level: StatusLevel) -> None:
    if level is StatusLevel.SUCCESS:
        st.success(message)
    elif level is StatusLevel.WARNING:
        st.warning(message)
    elif level is StatusLevel.ERROR:
        st.error(message)
    else:
        st.info(message)


NOTIFICATION_REFRESH_SECONDS = 1


@st.fragment(run_every=NOTIFICATION_REFRESH_SECONDS)
def render_notification(controller: OrderController) -> None:
    """Render the visible notification and re-check its expiry every second."""
    notification = controller.notifier.current()
    if notification is not None:
        render_status(notification.message, notification.level)
