"""
Wire shapes shared by the HTTP app and the CLI.

Field names on the wire are camelCase (``requestID``, ``orderTime``...);
the models accept either the alias or the Python name on input.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, assert_never

from pydantic import BaseModel, ConfigDict, Field

from foodstack_orders.core.domain.model.menu import Menu
from foodstack_orders.core.domain.model.order import (
    Order,
    OrderRequest,
    OrderRequestItem,
)
from foodstack_orders.core.ports.inbound.place_order import (
    Accepted,
    DuplicateEcho,
    PlacementOutcome,
    PlacementStatus,
    RejectedDuplicateConflict,
    RejectedInvalid,
    RejectedUnknownMeal,
)

# ---- DTOs ------------------------------------------------------------------


class _Dto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemIn(_Dto):
    # Left unconstrained: the engine reports bad ids and quantities itself.
    meal_id: str | None = Field(default=None, alias="id", examples=["meal-1"])
    quantity: int = Field(default=0, examples=[2])


class PlaceOrderRequest(_Dto):
    request_id: str | None = Field(
        default=None, alias="requestID", examples=["2f1c6e0a-client-key"]
    )
    meals: List[OrderItemIn | None] | None = None


class OrderItemOut(_Dto):
    meal_id: str = Field(alias="id")
    quantity: int


class OrderRequestOut(_Dto):
    request_id: str = Field(alias="requestID")
    meals: List[OrderItemOut]


class OrderOut(_Dto):
    order_id: str = Field(alias="orderID")
    order_time: datetime = Field(alias="orderTime")
    request: OrderRequestOut


class ValidationIssueOut(_Dto):
    code: str
    message: str
    meal_id: str | None = Field(default=None, alias="mealID")


class SuccessResponse(_Dto):
    status: str
    message: str
    order: OrderOut


class InvalidOrderRequestResponse(_Dto):
    status: str
    message: str
    errors: List[ValidationIssueOut]


class DuplicationResponse(_Dto):
    status: str
    message: str
    has_existing_order: bool = Field(alias="hasExistingOrder")
    is_conflict: bool = Field(alias="isConflict")
    existing_order: OrderOut | None = Field(alias="existingOrder")


class MealNotValidResponse(_Dto):
    status: str
    message: str
    invalid_meals: List[str] = Field(alias="invalidMeals")


class MealOut(_Dto):
    meal_id: str = Field(alias="id")
    name: str
    category: str
    image_url: str = Field(alias="imageUrl")
    price: Decimal


class MenuOut(_Dto):
    menu_id: str = Field(alias="menuID")
    menu_name: str = Field(alias="menuName")
    meals: List[MealOut]


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str


# ---- mapping helpers -------------------------------------------------------


def to_request(req: PlaceOrderRequest) -> OrderRequest:
    return OrderRequest(
        request_id=req.request_id,
        meals=None
        if req.meals is None
        else tuple(
            None if m is None else OrderRequestItem(meal_id=m.meal_id, quantity=m.quantity)
            for m in req.meals
        ),
    )


def order_out(order: Order) -> OrderOut:
    return OrderOut(
        order_id=order.order_id.value,
        order_time=order.order_time,
        request=OrderRequestOut(
            request_id=order.request_id,
            meals=[
                OrderItemOut(meal_id=item.meal_id or "", quantity=item.quantity)
                for item in order.request.ordered_items()
            ],
        ),
    )


def menu_out(menu: Menu) -> MenuOut:
    return MenuOut(
        menu_id=menu.menu_id,
        menu_name=menu.menu_name,
        meals=[
            MealOut(
                meal_id=m.meal_id,
                name=m.name,
                category=m.category,
                image_url=m.image_url,
                price=m.price,
            )
            for m in menu.meals
            if m is not None
        ],
    )


def placement_body(outcome: PlacementOutcome) -> BaseModel:
    match outcome:
        case Accepted(order=order):
            return SuccessResponse(
                status=outcome.status.value, message=outcome.message, order=order_out(order)
            )
        case RejectedInvalid(errors=errors):
            return InvalidOrderRequestResponse(
                status=outcome.status.value,
                message=outcome.message,
                errors=[
                    ValidationIssueOut(code=e.code.value, message=e.message, meal_id=e.meal_id)
                    for e in errors
                ],
            )
        case RejectedDuplicateConflict(existing_order=existing) | DuplicateEcho(
            existing_order=existing
        ):
            return DuplicationResponse(
                status=outcome.status.value,
                message=outcome.message,
                has_existing_order=True,
                is_conflict=outcome.status is PlacementStatus.ORDER_CONFLICT,
                existing_order=order_out(existing),
            )
        case RejectedUnknownMeal(invalid_meals=invalid_meals):
            return MealNotValidResponse(
                status=outcome.status.value,
                message=outcome.message,
                invalid_meals=list(invalid_meals),
            )
        case _:
            assert_never(outcome)

