from __future__ import annotations

from typing import Protocol

from returns.maybe import Maybe

from foodstack_orders.core.domain.model.order import Order


class GetOrderUseCase(Protocol):
    def get_order_by_order_id(self, order_id: str) -> Maybe[Order]: ...

    def get_order_by_request_id(self, request_id: str) -> Maybe[Order]: ...
