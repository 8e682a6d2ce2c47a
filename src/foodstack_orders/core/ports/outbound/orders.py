from __future__ import annotations

from typing import Protocol, Sequence

from foodstack_orders.core.domain.model.order import Order, OrderId


class OrderStore(Protocol):
    """
    Durable order records keyed by order id, with a secondary lookup by
    request id (case-insensitive).

    ``add`` is the only write. It must fail with ``OrderIdCollision`` if the
    order id is taken and with ``DuplicateRequestId`` if another order already
    holds the request id; the check and the write happen as one step.
    Storage problems raise ``StorageError``; absence is ``None``.
    """

    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def find_by_request_id(self, request_id: str) -> Order | None: ...

    def list_all(self) -> Sequence[Order]: ...
