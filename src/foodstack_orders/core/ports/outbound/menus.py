from __future__ import annotations

from typing import Protocol, Sequence

from foodstack_orders.core.domain.model.menu import Menu


class MenuCatalog(Protocol):
    """Read-only view of the orderable meals. Never cached by callers."""

    def get_all_menus(self) -> Sequence[Menu]: ...

    def get_menu(self, menu_id: str) -> Menu | None: ...

    def get_menu_ids(self) -> Sequence[str]: ...
