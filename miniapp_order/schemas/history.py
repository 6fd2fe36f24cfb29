"""Order history schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from miniapp_order.utils.time import parse_timestamp


class HistoryOrderStatus(str, Enum):
    """Lifecycle states reported by the order service."""

    PENDING_CUSTOMER = "pending_customer"
    PENDING_STORE = "pending_store"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED_BY_CUSTOMER = "cancelled_by_customer"
    CANCELLED_BY_STORE = "cancelled_by_store"


class HistoryOrder(BaseModel):
    """Read-only projection of a past order."""

    order_id: str
    total_amount: int | float
    customer_name: str
    customer_phone: str
    created_at: str
    pickup_time: str
    items: str
    status: HistoryOrderStatus | str = Field(union_mode="left_to_right")
    delivery_address: str | None = None
    notes: str | None = None

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @property
    def created_at_time(self) -> datetime | None:
        """Creation time as naive local time, or None when the service sent an unknown format."""
        return parse_timestamp(self.created_at)
