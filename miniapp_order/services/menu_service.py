"""Menu loading with a built-in fallback catalog."""

import logging

from miniapp_order.schemas.menu import MenuItem, MenuItemStatus
from miniapp_order.schemas.session import StatusLevel
from miniapp_order.services.notifications import Notifier
from miniapp_order.services.order_client import OrderServiceClient, OrderServiceError

logger = logging.getLogger(__name__)

MENU_FALLBACK_MESSAGE: str = "Failed to load the menu, showing the default menu"

DEFAULT_MENU: tuple[MenuItem, ...] = (
    MenuItem(name="滷肉飯", price=35, icon="🍚", status=MenuItemStatus.AVAILABLE),
    MenuItem(name="雞肉飯", price=40, icon="🍗", status=MenuItemStatus.AVAILABLE),
    MenuItem(name="蚵仔煎", price=65, icon="🍳", status=MenuItemStatus.AVAILABLE),
    MenuItem(name="大腸麵線", price=50, icon="🍜", status=MenuItemStatus.AVAILABLE),
    MenuItem(name="珍珠奶茶", price=45, icon="🥤", status=MenuItemStatus.AVAILABLE),
)


def fetch_menu(client: OrderServiceClient) -> list[MenuItem]:
    """Fetch the remote catalog; raises `OrderServiceError` on failure."""
    return client.get_menu()


def load_menu(client: OrderServiceClient, notifier: Notifier) -> list[MenuItem]:
    """Return the remote catalog, or the default one with a warning when it is unreachable."""
    try:
        return fetch_menu(client)
    except OrderServiceError as exc:
        logger.warning("[MENU] Menu fetch failed, using default menu: %s", exc.message)
        notifier.show(MENU_FALLBACK_MESSAGE, StatusLevel.WARNING)
        return list(DEFAULT_MENU)
