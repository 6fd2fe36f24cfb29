"""Menu and cart schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MenuItemStatus(str, Enum):
    """Availability of a catalog entry, using the service's wire values."""

    AVAILABLE = "供應中"
    SOLD_OUT = "售完"
    SEASONAL = "季節限定"


class MenuItem(BaseModel):
    """Orderable catalog entry; `name` is unique within one menu snapshot."""

    name: str
    price: int = Field(ge=0)
    icon: str = ""
    status: MenuItemStatus = MenuItemStatus.AVAILABLE
    image: str | None = None

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @property
    def is_available(self) -> bool:
        return self.status is MenuItemStatus.AVAILABLE


class CartLine(MenuItem):
    """Menu item snapshot taken when first added, plus its quantity."""

    quantity: int = Field(ge=1)


Cart = dict[str, CartLine]
