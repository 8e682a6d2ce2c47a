from __future__ import annotations

from dataclasses import dataclass

from returns.maybe import Maybe, Nothing

from foodstack_orders.core.domain.model.order import Order, OrderId
from foodstack_orders.core.ports.inbound.get_order import GetOrderUseCase
from foodstack_orders.core.ports.outbound.orders import OrderStore


@dataclass(frozen=True)
class GetOrderDeps:
    orders: OrderStore


@dataclass(frozen=True)
class GetOrderService(GetOrderUseCase):
    deps: GetOrderDeps

    def get_order_by_order_id(self, order_id: str) -> Maybe[Order]:
        if not (order_id or "").strip():
            return Nothing
        return Maybe.from_optional(self.deps.orders.get(OrderId(order_id.strip())))

    def get_order_by_request_id(self, request_id: str) -> Maybe[Order]:
        if not (request_id or "").strip():
            return Nothing
        return Maybe.from_optional(self.deps.orders.find_by_request_id(request_id))
