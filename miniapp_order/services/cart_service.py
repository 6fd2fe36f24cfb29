"""Cart operations.

The cart maps item name to a line. Lines are price-locked: the item snapshot
is copied from the menu when the line is created and is never refreshed from
a later menu, so increments keep the original price, icon and status.
"""

from collections.abc import Iterable

from miniapp_order.schemas.menu import Cart, CartLine, MenuItem


def find_available_item(menu: Iterable[MenuItem], item_name: str) -> MenuItem | None:
    """Return the menu entry with this name if it can currently be ordered."""
    for item in menu:
        if item.name == item_name and item.is_available:
            return item
    return None


def update_cart(cart: Cart, menu: Iterable[MenuItem], item_name: str, delta: int) -> Cart:
    """Return a new cart with `delta` applied to the line for `item_name`.

    A missing item is added with quantity 1 whatever the size of a positive
    delta, and only when the menu lists it as available. A line whose quantity
    drops to zero or below is removed.
    """
    existing: CartLine | None = cart.get(item_name)
    if existing is None:
        if delta <= 0:
            return cart
        menu_item = find_available_item(menu, item_name)
        if menu_item is None:
            return cart
        return {**cart, item_name: CartLine(**menu_item.model_dump(), quantity=1)}

    new_quantity: int = existing.quantity + delta
    updated: Cart = dict(cart)
    if new_quantity <= 0:
        del updated[item_name]
    else:
        updated[item_name] = existing.model_copy(update={"quantity": new_quantity})
    return updated


def get_quantity(cart: Cart, item_name: str) -> int:
    """Return the quantity in the cart for `item_name`, 0 when absent."""
    line = cart.get(item_name)
    return line.quantity if line is not None else 0


def clear_cart(cart: Cart, *, confirmed: bool) -> Cart:
    """Empty the cart once the user has confirmed the destructive action."""
    if not confirmed:
        return cart
    return {}
