"""Order amount calculation."""

from miniapp_order.core.config import settings
from miniapp_order.schemas.menu import Cart
from miniapp_order.schemas.order import OrderTotals


def compute_totals(cart: Cart, delivery_address: str, delivery_fee: int | None = None) -> OrderTotals:
    """Return subtotal, delivery fee and total for the cart.

    The delivery fee applies only when a non-blank delivery address is given.
    """
    fee_amount: int = settings.delivery_fee if delivery_fee is None else delivery_fee
    subtotal: int = sum(line.price * line.quantity for line in cart.values())
    fee: int = fee_amount if delivery_address.strip() else 0
    return OrderTotals(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)
