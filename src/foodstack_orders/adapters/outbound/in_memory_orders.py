from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Sequence

from foodstack_orders.core.domain.model.errors import DuplicateRequestId, OrderIdCollision
from foodstack_orders.core.domain.model.order import Order, OrderId, fold_key
from foodstack_orders.core.ports.outbound.orders import OrderStore


@dataclass
class InMemoryOrderStore(OrderStore):
    _store: Dict[str, Order] = field(default_factory=dict)
    _by_request: Dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, order: Order) -> None:
        key = order.order_id.value
        request_key = fold_key(order.request_id)
        with self._lock:
            if key in self._store:
                raise OrderIdCollision(message="order_id already exists", order_id=key)
            if request_key in self._by_request:
                raise DuplicateRequestId(
                    message="request id already has an order",
                    request_id=order.request_id,
                    existing_order_id=self._by_request[request_key],
                )
            self._store[key] = order
            self._by_request[request_key] = key

    def get(self, order_id: OrderId) -> Order | None:
        return self._store.get(order_id.value)

    def find_by_request_id(self, request_id: str) -> Order | None:
        key = self._by_request.get(fold_key(request_id))
        if key is None:
            return None
        return self._store.get(key)

    def list_all(self) -> Sequence[Order]:
        with self._lock:
            return tuple(self._store.values())  # insertion order
