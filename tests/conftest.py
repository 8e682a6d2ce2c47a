from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

import pytest

from foodstack_orders.adapters.outbound.file_orders import FileOrderStore
from foodstack_orders.core.domain.model.menu import Meal, Menu
from foodstack_orders.core.domain.service.get_order_service import (
    GetOrderDeps,
    GetOrderService,
)
from foodstack_orders.core.domain.service.place_order_service import (
    PlaceOrderDeps,
    PlaceOrderService,
)


@dataclass
class StaticMenuCatalog:
    """Menu catalog over a list the test can mutate between calls."""

    menus: List[Menu] = field(default_factory=list)

    def get_all_menus(self):
        return tuple(self.menus)

    def get_menu(self, menu_id):
        return next((m for m in self.menus if m.menu_id == menu_id), None)

    def get_menu_ids(self):
        return tuple(m.menu_id for m in self.menus)


def _make_menu(**overrides):
    defaults = dict(
        menu_id="main",
        menu_name="Main dishes",
        meals=(
            Meal(meal_id="meal-1", name="Burger", category="main", price=Decimal("10")),
            Meal(meal_id="meal-2", name="Pizza", category="main", price=Decimal("15")),
        ),
    )
    defaults.update(overrides)
    return Menu(**defaults)


@pytest.fixture
def make_catalog():
    return StaticMenuCatalog


@pytest.fixture
def catalog():
    return StaticMenuCatalog([_make_menu()])


@pytest.fixture
def store(tmp_path):
    return FileOrderStore(tmp_path / "orders")


@pytest.fixture
def service(store, catalog):
    return PlaceOrderService(PlaceOrderDeps(orders=store, menus=catalog))


@pytest.fixture
def lookup(store):
    return GetOrderService(GetOrderDeps(orders=store))
