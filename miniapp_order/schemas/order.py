"""Order form, payload and confirmation schemas."""

from datetime import date, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator
from pydantic.alias_generators import to_camel

from miniapp_order.schemas.menu import CartLine


class OrderForm(BaseModel):
    """Customer-editable order inputs."""

    customer_name: str = ""
    customer_phone: str = ""
    pickup_date: date | None = None
    pickup_time: time | None = None
    delivery_address: str = ""
    notes: str = ""


class ValidationResult(BaseModel):
    """Outcome of validating an order form against the cart."""

    phone_error: str | None = None
    time_error: str | None = None
    general_errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.phone_error is None and self.time_error is None and not self.general_errors


class OrderTotals(BaseModel):
    """Derived order amounts in the smallest currency unit."""

    subtotal: int
    delivery_fee: int
    total: int


class OrderItemPayload(BaseModel):
    """Single order line as sent to the order service."""

    name: str
    quantity: int = Field(ge=1)
    price: int = Field(ge=0)


class OrderPayload(BaseModel):
    """Normalized order data sent with the createOrder action."""

    customer_name: str
    customer_phone: str
    items: list[OrderItemPayload]
    pickup_time: str
    delivery_address: str
    notes: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderDraft(BaseModel):
    """Locally assembled, unpersisted order."""

    customer_name: str
    customer_phone: str
    items: list[CartLine]
    pickup_time: str
    delivery_address: str = ""
    notes: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfirmedOrder(OrderDraft):
    """Order acknowledged by the order service."""

    order_id: str
    total_amount: int | float


class CreateOrderResult(BaseModel):
    """Data returned by a successful createOrder call; every field may be omitted."""

    order_id: str | None = None
    total_amount: int | float | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("order_id", "total_amount", mode="wrap")
    @classmethod
    def drop_unreadable(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        """Treat an unreadable field as omitted so the other field is still used."""
        try:
            return handler(value)
        except ValidationError:
            return None
