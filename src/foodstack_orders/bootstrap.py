from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from foodstack_orders.adapters.inbound.web.fastapi_app import create_app
from foodstack_orders.adapters.outbound.file_menus import FileMenuCatalog
from foodstack_orders.adapters.outbound.file_orders import FileOrderStore
from foodstack_orders.adapters.outbound.in_memory_orders import InMemoryOrderStore
from foodstack_orders.core.domain.service.get_order_service import (
    GetOrderDeps,
    GetOrderService,
)
from foodstack_orders.core.domain.service.menu_service import MenuDeps, MenuService
from foodstack_orders.core.domain.service.place_order_service import (
    PlaceOrderDeps,
    PlaceOrderService,
)
from foodstack_orders.core.ports.outbound.menus import MenuCatalog
from foodstack_orders.core.ports.outbound.orders import OrderStore
from foodstack_orders.logging_config import get_logger, setup_logging
from foodstack_orders.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True)
class UseCases:
    place_order: PlaceOrderService
    get_order: GetOrderService
    menus: MenuService


def build_usecases(
    settings: Settings,
    orders: OrderStore | None = None,
    menus: MenuCatalog | None = None,
) -> UseCases:
    if orders is None:
        if settings.store_backend == "memory":
            orders = InMemoryOrderStore()
        else:
            orders = FileOrderStore(settings.orders_dir)
    if menus is None:
        menus = FileMenuCatalog(settings.menu_dir)

    log.info(
        "order store: %s, menus: %s", type(orders).__name__, settings.menu_dir
    )
    return UseCases(
        place_order=PlaceOrderService(PlaceOrderDeps(orders=orders, menus=menus)),
        get_order=GetOrderService(GetOrderDeps(orders=orders)),
        menus=MenuService(MenuDeps(menus=menus)),
    )


def create_asgi_app() -> FastAPI:
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    usecases = build_usecases(settings)
    return create_app(
        usecases.place_order,
        usecases.get_order,
        usecases.menus,
        root_path=settings.root_path,
    )
