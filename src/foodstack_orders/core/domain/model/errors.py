from __future__ import annotations

from dataclasses import dataclass

# These are raised, so they stay mutable with identity hashing.


@dataclass(eq=False)
class PlaceOrderError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(eq=False)
class StorageError(PlaceOrderError):
    path: str = ""

    def __str__(self) -> str:  # pragma: no cover
        if not self.path:
            return self.message
        return f"{self.message} (path={self.path})"


@dataclass(eq=False)
class CorruptOrderRecord(StorageError):
    pass


@dataclass(eq=False)
class OrderIdCollision(StorageError):
    order_id: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"order_id_collision: {self.order_id} ({self.message})"


@dataclass(eq=False)
class DuplicateRequestId(StorageError):
    request_id: str = ""
    existing_order_id: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return (
            f"duplicate_request_id: {self.request_id} "
            f"existing={self.existing_order_id} ({self.message})"
        )


@dataclass(eq=False)
class CorruptMenuFile(StorageError):
    pass
