from __future__ import annotations

from typing import Sequence

from pydantic import ValidationError as PayloadValidationError
from returns.maybe import Maybe, Some

from foodstack_orders.adapters.inbound.schemas import (
    PlaceOrderRequest,
    order_out,
    placement_body,
    to_request,
)
from foodstack_orders.core.domain.model.order import Order
from foodstack_orders.core.ports.inbound.get_order import GetOrderUseCase
from foodstack_orders.core.ports.inbound.place_order import (
    PlaceOrderUseCase,
    PlacementStatus,
)

USAGE = (
    "usage: foodstack-orders place '<json>'\n"
    "       foodstack-orders get <orderID>\n"
    "       foodstack-orders by-request <requestID>\n"
    "       foodstack-orders serve"
)

_OK_STATUSES = {PlacementStatus.SUCCESS, PlacementStatus.EXISTING_ORDER}


def run_cli(
    place_order_uc: PlaceOrderUseCase,
    get_order_uc: GetOrderUseCase,
    argv: Sequence[str],
) -> int:
    """
    Example:
      foodstack-orders place '{"requestID":"r-1","meals":[{"id":"meal-1","quantity":2}]}'

    Exit codes: 0 accepted / existing order / found, 1 rejected / not found,
    2 bad usage or unparsable input.
    """
    if len(argv) != 2:
        print(USAGE)
        return 2

    command, arg = argv
    if command == "place":
        return _place(place_order_uc, arg)
    if command == "get":
        return _show(get_order_uc.get_order_by_order_id(arg))
    if command == "by-request":
        return _show(get_order_uc.get_order_by_request_id(arg))

    print(USAGE)
    return 2


def _place(usecase: PlaceOrderUseCase, raw: str) -> int:
    try:
        payload = PlaceOrderRequest.model_validate_json(raw)
    except PayloadValidationError as e:
        print(f"invalid_input: {e.error_count()} error(s)")
        for err in e.errors():
            print(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        return 2

    outcome = usecase.place_order(to_request(payload))
    print(placement_body(outcome).model_dump_json(by_alias=True, indent=2))
    return 0 if outcome.status in _OK_STATUSES else 1


def _show(found: Maybe[Order]) -> int:
    if isinstance(found, Some):
        print(order_out(found.unwrap()).model_dump_json(by_alias=True, indent=2))
        return 0
    print("[ng] order not found")
    return 1
