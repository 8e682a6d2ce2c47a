from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from foodstack_orders.core.domain.model.order import (
    Order,
    OrderId,
    OrderRequest,
    now_utc,
)
from foodstack_orders.core.domain.service.matching import (
    build_meal_index,
    find_unknown_meals,
    requests_equivalent,
)
from foodstack_orders.core.domain.service.request_locks import RequestLocks
from foodstack_orders.core.domain.service.validation import validate_order_request
from foodstack_orders.core.ports.inbound.place_order import (
    Accepted,
    DuplicateEcho,
    DuplicationResult,
    PlaceOrderUseCase,
    PlacementOutcome,
    RejectedDuplicateConflict,
    RejectedInvalid,
    RejectedUnknownMeal,
)
from foodstack_orders.core.ports.outbound.menus import MenuCatalog
from foodstack_orders.core.ports.outbound.orders import OrderStore
from foodstack_orders.logging_config import get_logger

log = get_logger(__name__)

# Every step returns Failure(outcome) to stop the pipeline; that includes the
# duplicate echo, which is a successful answer without a write.
Step = Result[OrderRequest, PlacementOutcome]


@dataclass(frozen=True)
class PlaceOrderDeps:
    orders: OrderStore
    menus: MenuCatalog
    locks: RequestLocks = field(default_factory=RequestLocks)
    clock: Callable[[], datetime] = now_utc


@dataclass(frozen=True)
class PlaceOrderService(PlaceOrderUseCase):
    deps: PlaceOrderDeps

    def place_order(self, request: OrderRequest | None) -> PlacementOutcome:
        result: Result[Accepted, PlacementOutcome] = flow(
            request,
            _validate,
            bind(self._place_validated),
        )
        if isinstance(result, Success):
            return result.unwrap()
        return result.failure()

    def validate_parameters(self, request: OrderRequest | None) -> RejectedInvalid | None:
        issues = validate_order_request(request)
        if not issues:
            return None
        return RejectedInvalid(errors=issues)

    def check_duplication(
        self, request: OrderRequest | None
    ) -> DuplicationResult | None:
        if request is None or not (request.request_id or "").strip():
            return None

        existing = self.deps.orders.find_by_request_id(request.request_id or "")
        if existing is None:
            return None

        return DuplicationResult(
            existing_order=existing,
            is_conflict=not requests_equivalent(request, existing.request),
        )

    # ---- pipeline ----------------------------------------------------------

    def _place_validated(
        self, request: OrderRequest
    ) -> Result[Accepted, PlacementOutcome]:
        with self.deps.locks.hold(request.request_id or ""):
            return flow(
                request,
                self._reject_duplicates,
                bind(self._reject_unknown_meals),
                map_(self._persist),
            )

    def _reject_duplicates(self, request: OrderRequest) -> Step:
        duplication = self.check_duplication(request)
        if duplication is None:
            return Success(request)

        existing = duplication.existing_order
        if duplication.is_conflict:
            log.warning(
                "[Request: %s] conflicts with existing order %s",
                request.request_id,
                existing.order_id.value,
            )
            return Failure(RejectedDuplicateConflict(existing_order=existing))

        log.info(
            "[Request: %s] repeated, returning existing order %s",
            request.request_id,
            existing.order_id.value,
        )
        return Failure(DuplicateEcho(existing_order=existing))

    def _reject_unknown_meals(self, request: OrderRequest) -> Step:
        meal_index = build_meal_index(self.deps.menus.get_all_menus())
        unknown = find_unknown_meals(request, meal_index)
        if unknown:
            log.info("[Request: %s] unknown meals: %s", request.request_id, unknown)
            return Failure(RejectedUnknownMeal(invalid_meals=unknown))
        return Success(request)

    def _persist(self, request: OrderRequest) -> Accepted:
        order = Order(
            order_id=OrderId.new(),
            order_time=self.deps.clock(),
            request=request.filtered(),
        )
        self.deps.orders.add(order)
        log.info(
            "[Request: %s] order %s accepted", request.request_id, order.order_id.value
        )
        return Accepted(order=order)


def _validate(request: OrderRequest | None) -> Step:
    issues = validate_order_request(request)
    if issues:
        return Failure(RejectedInvalid(errors=issues))
    # validated, so not None
    return Success(request)  # type: ignore[arg-type]
