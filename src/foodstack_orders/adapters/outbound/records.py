from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from foodstack_orders.core.domain.model.menu import Meal, Menu
from foodstack_orders.core.domain.model.order import (
    Order,
    OrderId,
    OrderRequest,
    OrderRequestItem,
)

# ---- persisted shapes (one JSON document per order / per menu) -------------


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemRecord(_Record):
    meal_id: str = Field(alias="id", min_length=1)
    quantity: int = Field(gt=0)


class OrderRequestRecord(_Record):
    request_id: str = Field(alias="requestID", min_length=1)
    meals: List[OrderItemRecord] = Field(default_factory=list)


class OrderRecord(_Record):
    order_id: str = Field(alias="orderID", min_length=1)
    order_time: AwareDatetime = Field(alias="orderTime")
    request: OrderRequestRecord

    @classmethod
    def from_order(cls, order: Order) -> "OrderRecord":
        return cls(
            order_id=order.order_id.value,
            order_time=order.order_time,
            request=OrderRequestRecord(
                request_id=order.request_id,
                meals=[
                    OrderItemRecord(meal_id=item.meal_id or "", quantity=item.quantity)
                    for item in order.request.ordered_items()
                ],
            ),
        )

    def to_order(self) -> Order:
        return Order(
            order_id=OrderId(self.order_id),
            order_time=self.order_time,
            request=OrderRequest(
                request_id=self.request.request_id,
                meals=tuple(
                    OrderRequestItem(meal_id=m.meal_id, quantity=m.quantity)
                    for m in self.request.meals
                ),
            ),
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class MealRecord(_Record):
    meal_id: str = Field(alias="id", default="")
    name: str = ""
    category: str = ""
    image_url: str = Field(alias="imageUrl", default="")
    price: Decimal = Decimal("0")

    def to_meal(self) -> Meal:
        return Meal(
            meal_id=self.meal_id,
            name=self.name,
            category=self.category,
            price=self.price,
            image_url=self.image_url,
        )


class MenuRecord(_Record):
    menu_id: str = Field(alias="menuID", default="")
    menu_name: str = Field(alias="menuName", default="")
    meals: List[MealRecord | None] = Field(default_factory=list)

    def to_menu(self, fallback_id: str = "") -> Menu:
        return Menu(
            menu_id=self.menu_id or fallback_id,
            menu_name=self.menu_name,
            meals=tuple(m.to_meal() if m is not None else None for m in self.meals),
        )
