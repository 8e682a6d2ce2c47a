from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError as RecordValidationError

from foodstack_orders.adapters.outbound.records import MenuRecord
from foodstack_orders.core.domain.model.errors import CorruptMenuFile, StorageError
from foodstack_orders.core.domain.model.menu import Menu
from foodstack_orders.core.ports.outbound.menus import MenuCatalog
from foodstack_orders.logging_config import get_logger

log = get_logger(__name__)


class FileMenuCatalog(MenuCatalog):
    """Reads ``<menuID>.json`` files from ``root`` on every call."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def get_all_menus(self) -> Sequence[Menu]:
        return tuple(self._load(path) for path in self._menu_paths())

    def get_menu(self, menu_id: str) -> Menu | None:
        if not menu_id or Path(menu_id).name != menu_id:
            return None
        path = self.root / f"{menu_id}.json"
        if not path.is_file():
            return None
        return self._load(path)

    def get_menu_ids(self) -> Sequence[str]:
        return tuple(path.stem for path in self._menu_paths() if path.stem.strip())

    def _menu_paths(self) -> List[Path]:
        if not self.root.is_dir():
            return []
        return sorted(p for p in self.root.glob("*.json") if p.is_file())

    def _load(self, path: Path) -> Menu:
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(message=f"cannot read menu file: {e}", path=str(path)) from e

        try:
            return MenuRecord.model_validate_json(raw).to_menu(fallback_id=path.stem)
        except RecordValidationError as e:
            log.error("invalid menu file %s: %s", path, e.error_count())
            raise CorruptMenuFile(message="menu file is not valid", path=str(path)) from e
