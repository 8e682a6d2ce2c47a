from __future__ import annotations

from typing import Protocol, Sequence

from returns.maybe import Maybe

from foodstack_orders.core.domain.model.menu import Menu


class MenuQueryUseCase(Protocol):
    def list_menus(self) -> Sequence[Menu]: ...

    def get_menu(self, menu_id: str) -> Maybe[Menu]: ...

    def list_menu_ids(self) -> Sequence[str]: ...
