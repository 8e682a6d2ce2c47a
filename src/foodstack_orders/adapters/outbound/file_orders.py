from __future__ import annotations

import os
import re
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Set

from filelock import FileLock, Timeout
from pydantic import ValidationError as RecordValidationError

from foodstack_orders.adapters.outbound.records import OrderRecord
from foodstack_orders.core.domain.model.errors import (
    CorruptOrderRecord,
    DuplicateRequestId,
    OrderIdCollision,
    StorageError,
)
from foodstack_orders.core.domain.model.order import Order, OrderId, fold_key
from foodstack_orders.core.ports.outbound.orders import OrderStore
from foodstack_orders.logging_config import get_logger

log = get_logger(__name__)

_SAFE_ORDER_ID = re.compile(r"^[A-Za-z0-9_-]+$")

# seconds to wait for another process holding the orders lock
LOCK_TIMEOUT = 30


class FileOrderStore(OrderStore):
    """
    One ``<orderID>.json`` document per order under ``root``.

    New records are written to a temp file, fsynced and hard-linked into
    place, so a record either appears complete or not at all and an existing
    file is never replaced.

    Other processes may write to the same ``root`` (the CLI next to a running
    server). ``add`` therefore runs under a ``FileLock`` beside ``root`` and
    folds in every record it has not seen yet before checking the request id.
    A lookup that misses the request-id index does the same, so records
    written elsewhere, corrupt ones included, are never silently skipped.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self._lock = threading.RLock()
        self._file_lock = FileLock(
            str(self.root.parent / f".{self.root.name}.lock"), timeout=LOCK_TIMEOUT
        )
        self._by_request: Dict[str, str] = {}
        self._indexed: Set[str] = set()

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._lock:
            try:
                self.root.parent.mkdir(parents=True, exist_ok=True)
                self._file_lock.acquire()
            except Timeout as e:
                raise StorageError(
                    message="timed out waiting for the orders lock",
                    path=self._file_lock.lock_file,
                ) from e
            except OSError as e:
                raise StorageError(
                    message=f"cannot take the orders lock: {e}",
                    path=self._file_lock.lock_file,
                ) from e
            try:
                yield
            finally:
                self._file_lock.release()

    # ---- writes ------------------------------------------------------------

    def add(self, order: Order) -> None:
        order_id = order.order_id.value
        path = self._path_for(order_id)
        if path is None:
            raise StorageError(message=f"unusable order id: {order_id!r}")

        with self._exclusive():
            self._refresh_index()
            key = fold_key(order.request_id)
            if key in self._by_request:
                raise DuplicateRequestId(
                    message="request id already has an order",
                    request_id=order.request_id,
                    existing_order_id=self._by_request[key],
                )

            self._create(path, OrderRecord.from_order(order).to_json())
            self._by_request[key] = order_id
            self._indexed.add(path.name)

    def _create(self, path: Path, payload: str) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".", suffix=".tmp")
        except OSError as e:
            raise StorageError(message=f"cannot prepare order record: {e}", path=str(path)) from e

        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.link(tmp, path)
        except FileExistsError as e:
            raise OrderIdCollision(
                message="order record already exists", path=str(path), order_id=path.stem
            ) from e
        except OSError as e:
            raise StorageError(message=f"cannot write order record: {e}", path=str(path)) from e
        finally:
            tmp.unlink(missing_ok=True)

    # ---- reads -------------------------------------------------------------

    def get(self, order_id: OrderId) -> Order | None:
        path = self._path_for(order_id.value)
        if path is None:
            return None
        return self._read(path)

    def find_by_request_id(self, request_id: str) -> Order | None:
        key = fold_key(request_id)
        with self._lock:
            order_id = self._by_request.get(key)
            if order_id is None and self.root.is_dir():
                with self._exclusive():
                    self._refresh_index()
                order_id = self._by_request.get(key)
        if order_id is None:
            return None
        return self.get(OrderId(order_id))

    def list_all(self) -> Sequence[Order]:
        orders: List[Order] = []
        for path in self._record_paths():
            order = self._read(path)
            if order is not None:
                orders.append(order)
        return tuple(orders)

    def _refresh_index(self) -> None:
        # caller holds _exclusive(); records are never removed, so only
        # files not indexed yet need reading
        added = 0
        for path in self._record_paths():
            if path.name in self._indexed:
                continue
            order = self._read(path)
            if order is None:
                continue
            self._by_request.setdefault(fold_key(order.request_id), order.order_id.value)
            self._indexed.add(path.name)
            added += 1
        if added:
            log.info("order index: %d new record(s) from %s", added, self.root)

    def _record_paths(self) -> List[Path]:
        if not self.root.is_dir():
            return []
        try:
            return sorted(p for p in self.root.glob("*.json") if p.is_file())
        except OSError as e:
            raise StorageError(message=f"cannot list order records: {e}", path=str(self.root)) from e

    def _read(self, path: Path) -> Order | None:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(message=f"cannot read order record: {e}", path=str(path)) from e

        try:
            order = OrderRecord.model_validate_json(raw).to_order()
        except RecordValidationError as e:
            log.error("corrupt order record %s: %s", path, e.error_count())
            raise CorruptOrderRecord(message="order record is not valid", path=str(path)) from e

        if order.order_id.value != path.stem:
            log.error("order record %s holds orderID %s", path, order.order_id.value)
            raise CorruptOrderRecord(
                message="orderID does not match the record file name", path=str(path)
            )
        return order

    def _path_for(self, order_id: str) -> Path | None:
        if not _SAFE_ORDER_ID.match(order_id or ""):
            return None
        return self.root / f"{order_id}.json"
