from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from foodstack_orders.core.domain.model.order import fold_key


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class RequestLocks:
    """
    One mutex per request id (case-insensitive), created on demand and
    dropped once nobody holds or waits for it.

    Example:
        locks = RequestLocks()
        with locks.hold("req-1"):
            ...  # check-then-write for req-1
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._slots: Dict[str, _Slot] = {}

    def hold(self, request_id: str) -> "_Hold":
        return _Hold(self, fold_key(request_id))

    def active(self) -> int:
        with self._guard:
            return len(self._slots)

    def _acquire(self, key: str) -> None:
        with self._guard:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _Slot()
            slot.users += 1
        slot.lock.acquire()

    def _release(self, key: str) -> None:
        with self._guard:
            slot = self._slots[key]
            slot.lock.release()
            slot.users -= 1
            if slot.users == 0:
                del self._slots[key]


class _Hold:
    def __init__(self, owner: RequestLocks, key: str) -> None:
        self._owner = owner
        self._key = key

    def __enter__(self) -> "_Hold":
        self._owner._acquire(self._key)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._owner._release(self._key)
