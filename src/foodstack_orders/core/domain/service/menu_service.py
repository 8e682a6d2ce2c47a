from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from returns.maybe import Maybe, Nothing

from foodstack_orders.core.domain.model.menu import Menu
from foodstack_orders.core.ports.inbound.menus import MenuQueryUseCase
from foodstack_orders.core.ports.outbound.menus import MenuCatalog


@dataclass(frozen=True)
class MenuDeps:
    menus: MenuCatalog


@dataclass(frozen=True)
class MenuService(MenuQueryUseCase):
    deps: MenuDeps

    def list_menus(self) -> Sequence[Menu]:
        return tuple(self.deps.menus.get_all_menus())

    def get_menu(self, menu_id: str) -> Maybe[Menu]:
        if not (menu_id or "").strip():
            return Nothing
        return Maybe.from_optional(self.deps.menus.get_menu(menu_id.strip()))

    def list_menu_ids(self) -> Sequence[str]:
        return tuple(self.deps.menus.get_menu_ids())
