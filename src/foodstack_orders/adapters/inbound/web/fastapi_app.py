from __future__ import annotations

from typing import Any, List, assert_never

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from returns.maybe import Some

from foodstack_orders.adapters.inbound.schemas import (
    DuplicationResponse,
    ErrorResponse,
    InvalidOrderRequestResponse,
    MenuOut,
    OrderOut,
    PlaceOrderRequest,
    SuccessResponse,
    ValidationIssueOut,
    menu_out,
    order_out,
    placement_body,
    to_request,
)
from foodstack_orders.core.domain.model.validation import ValidationCode
from foodstack_orders.core.ports.inbound.get_order import GetOrderUseCase
from foodstack_orders.core.ports.inbound.menus import MenuQueryUseCase
from foodstack_orders.core.ports.inbound.place_order import (
    PlaceOrderUseCase,
    PlacementStatus,
)
from foodstack_orders.logging_config import get_logger

log = get_logger(__name__)


def http_status_for(status: PlacementStatus) -> int:
    match status:
        case PlacementStatus.SUCCESS | PlacementStatus.EXISTING_ORDER:
            return 200
        case PlacementStatus.INVALID_ORDER_REQUEST | PlacementStatus.MEAL_NOT_VALID:
            return 400
        case PlacementStatus.ORDER_CONFLICT:
            return 409
        case _:
            assert_never(status)


def _json(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json", by_alias=True)
    )


def _bad_request(message: str) -> JSONResponse:
    return _json(400, ErrorResponse(status=400, error="BadRequest", message=message))


def _not_found(message: str) -> JSONResponse:
    return _json(404, ErrorResponse(status=404, error="NotFound", message=message))


# ---- app factory -----------------------------------------------------------


def create_app(
    place_order_uc: PlaceOrderUseCase,
    get_order_uc: GetOrderUseCase,
    menus_uc: MenuQueryUseCase,
    root_path: str = "",
) -> FastAPI:
    app = FastAPI(title="foodstack_orders", root_path=root_path)

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # An absent or unparsable body never reaches the engine.
        log.info("rejected malformed payload on %s: %s", request.url.path, exc.errors())
        body = InvalidOrderRequestResponse(
            status=PlacementStatus.INVALID_ORDER_REQUEST.value,
            message="Order request is invalid.",
            errors=[
                ValidationIssueOut(
                    code=ValidationCode.NULL_REQUEST.value,
                    message="Request body is missing or malformed.",
                )
            ],
        )
        return _json(400, body)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled exception while processing %s", request.url.path)
        body = ErrorResponse(
            status=500,
            error="InternalServerError",
            message="An unexpected error occurred.",
        )
        return _json(500, body)

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/api/orders",
        responses={
            200: {"model": SuccessResponse},
            400: {"model": InvalidOrderRequestResponse},
            409: {"model": DuplicationResponse},
            500: {"model": ErrorResponse},
        },
    )
    def place_order(req: PlaceOrderRequest) -> Any:
        outcome = place_order_uc.place_order(to_request(req))
        return _json(http_status_for(outcome.status), placement_body(outcome))

    @app.get(
        "/api/orders/by-request/{request_id}",
        response_model=OrderOut,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def get_order_by_request_id(request_id: str) -> Any:
        if not request_id.strip():
            return _bad_request("requestID is required.")
        found = get_order_uc.get_order_by_request_id(request_id)
        if isinstance(found, Some):
            return _json(200, order_out(found.unwrap()))
        return _not_found("order not found")

    @app.get(
        "/api/orders/{order_id}",
        response_model=OrderOut,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def get_order_by_order_id(order_id: str) -> Any:
        if not order_id.strip():
            return _bad_request("orderID is required.")
        found = get_order_uc.get_order_by_order_id(order_id)
        if isinstance(found, Some):
            return _json(200, order_out(found.unwrap()))
        return _not_found("order not found")

    @app.get("/api/menu", response_model=List[MenuOut])
    def list_menus() -> Any:
        return [
            m.model_dump(mode="json", by_alias=True)
            for m in map(menu_out, menus_uc.list_menus())
        ]

    @app.get("/api/menu/ids", response_model=List[str])
    def list_menu_ids() -> Any:
        return list(menus_uc.list_menu_ids())

    @app.get(
        "/api/menu/{menu_id}",
        response_model=MenuOut,
        responses={404: {"model": ErrorResponse}},
    )
    def get_menu(menu_id: str) -> Any:
        found = menus_uc.get_menu(menu_id)
        if isinstance(found, Some):
            return _json(200, menu_out(found.unwrap()))
        return _not_found("menu not found")

    return app
