from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Protocol, Tuple, Union

from foodstack_orders.core.domain.model.order import Order, OrderRequest
from foodstack_orders.core.domain.model.validation import ValidationIssue


class PlacementStatus(str, Enum):
    SUCCESS = "Success"
    INVALID_ORDER_REQUEST = "InvalidOrderRequest"
    ORDER_CONFLICT = "OrderConflict"
    EXISTING_ORDER = "ExistingOrder"
    MEAL_NOT_VALID = "MealNotValid"


@dataclass(frozen=True)
class Accepted:
    order: Order
    status: Literal[PlacementStatus.SUCCESS] = field(
        default=PlacementStatus.SUCCESS, init=False
    )
    message: str = field(default="Order placed successfully.", init=False)


@dataclass(frozen=True)
class RejectedInvalid:
    errors: Tuple[ValidationIssue, ...]
    status: Literal[PlacementStatus.INVALID_ORDER_REQUEST] = field(
        default=PlacementStatus.INVALID_ORDER_REQUEST, init=False
    )
    message: str = field(default="Order request is invalid.", init=False)


@dataclass(frozen=True)
class RejectedDuplicateConflict:
    existing_order: Order
    status: Literal[PlacementStatus.ORDER_CONFLICT] = field(
        default=PlacementStatus.ORDER_CONFLICT, init=False
    )
    message: str = field(
        default="An order with this requestID already exists with different content.",
        init=False,
    )


@dataclass(frozen=True)
class DuplicateEcho:
    existing_order: Order
    status: Literal[PlacementStatus.EXISTING_ORDER] = field(
        default=PlacementStatus.EXISTING_ORDER, init=False
    )
    message: str = field(default="Existing order for this requestID.", init=False)


@dataclass(frozen=True)
class RejectedUnknownMeal:
    invalid_meals: Tuple[str, ...]
    status: Literal[PlacementStatus.MEAL_NOT_VALID] = field(
        default=PlacementStatus.MEAL_NOT_VALID, init=False
    )
    message: str = field(
        default="One or more requested meals do not exist.", init=False
    )


# Discriminated by ``status``.
PlacementOutcome = Union[
    Accepted,
    RejectedInvalid,
    RejectedDuplicateConflict,
    DuplicateEcho,
    RejectedUnknownMeal,
]


@dataclass(frozen=True)
class DuplicationResult:
    existing_order: Order
    is_conflict: bool


class PlaceOrderUseCase(Protocol):
    def place_order(self, request: OrderRequest | None) -> PlacementOutcome: ...

    def validate_parameters(
        self, request: OrderRequest | None
    ) -> RejectedInvalid | None: ...

    def check_duplication(
        self, request: OrderRequest | None
    ) -> DuplicationResult | None: ...
