from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Tuple
from uuid import uuid4

MAX_QUANTITY = 999


@dataclass(frozen=True)
class OrderId:
    value: str

    @staticmethod
    def new() -> "OrderId":
        return OrderId(uuid4().hex)


@dataclass(frozen=True)
class OrderRequestItem:
    meal_id: str | None
    quantity: int

    def is_ordered(self) -> bool:
        return self.quantity > 0


@dataclass(frozen=True)
class OrderRequest:
    """Client payload. ``request_id`` is the idempotency key."""

    request_id: str | None
    meals: Tuple[OrderRequestItem | None, ...] | None

    def ordered_items(self) -> Iterator[OrderRequestItem]:
        for item in self.meals or ():
            if item is not None and item.is_ordered():
                yield item

    def filtered(self) -> "OrderRequest":
        return OrderRequest(
            request_id=self.request_id,
            meals=tuple(
                OrderRequestItem(meal_id=item.meal_id, quantity=item.quantity)
                for item in self.ordered_items()
            ),
        )


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    order_time: datetime
    request: OrderRequest

    @property
    def request_id(self) -> str:
        return self.request.request_id or ""


def fold_key(value: str | None) -> str:
    return (value or "").casefold()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
