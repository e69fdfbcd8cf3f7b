"""Inventory management logic backed by a flat data file."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import (
    DuplicateRecordError,
    InsufficientStockError,
    MissingRecordError,
    PersistenceError,
    RecordNotFoundError,
)
from .query import DEFAULT_LOW_STOCK_THRESHOLD, low_stock_records, search_records
from .records import InventoryRecord, build_record
from .storage import FlatFileStorage

logger = logging.getLogger(__name__)


@dataclass
class InventoryManager:
    """Owns the ordered inventory records and the identifier counter.

    Every mutation rewrites the data file. A failed write is logged and kept
    in :attr:`last_save_error`; the in-memory records stay authoritative
    until the next successful save.
    """

    storage_path: Path
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    storage: FlatFileStorage = field(init=False)
    last_save_error: Optional[PersistenceError] = field(default=None, init=False)
    _records: List[InventoryRecord] = field(default_factory=list, init=False)
    _next_id: int = field(default=1, init=False)

    def __post_init__(self) -> None:
        self.storage_path = Path(self.storage_path)
        self.storage = FlatFileStorage(self.storage_path)
        self._populate(self.storage.load())

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------
    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def peek_next_id(self) -> int:
        return self._next_id

    # ------------------------------------------------------------------
    # Inventory operations
    # ------------------------------------------------------------------
    def list_items(self) -> List[InventoryRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def find_by_id(self, record_id: int) -> InventoryRecord:
        return self._records[self._index_of(record_id)]

    def add(self, record: Optional[InventoryRecord]) -> InventoryRecord:
        if record is None:
            raise MissingRecordError("Cannot add an empty record")
        if any(existing.id == record.id for existing in self._records):
            raise DuplicateRecordError(record.id)
        self._records.append(record)
        if record.id >= self._next_id:
            self._next_id = record.id + 1
        logger.info(
            "Added %s item %s (%s)",
            record.kind.value,
            record.id,
            record.name,
            extra={"record_id": record.id},
        )
        self._persist()
        return record

    def create(
        self,
        kind: Any,
        name: str,
        price: float,
        quantity: int,
        **details: Any,
    ) -> InventoryRecord:
        """Build a record with the next identifier and add it.

        The identifier is only consumed once the record has passed
        validation.
        """

        record = build_record(
            kind,
            id=self.peek_next_id(),
            name=name,
            price=price,
            quantity=quantity,
            **details,
        )
        self.next_id()
        return self.add(record)

    def update_stock(self, record_id: int, delta: int) -> int:
        """Apply a signed stock adjustment and return the new quantity.

        Adjustments that would leave a negative quantity are rejected and
        the record is left untouched.
        """

        index = self._index_of(record_id)
        record = self._records[index]
        new_quantity = record.quantity + delta
        if new_quantity < 0:
            raise InsufficientStockError(record_id, record.quantity, delta)
        self._records[index] = replace(record, quantity=new_quantity)
        logger.info(
            "Adjusted stock of item %s by %+d (%d -> %d)",
            record_id,
            delta,
            record.quantity,
            new_quantity,
            extra={"record_id": record_id, "delta": delta},
        )
        self._persist()
        return new_quantity

    def remove(self, record_id: int) -> str:
        index = self._index_of(record_id)
        record = self._records.pop(index)
        logger.info(
            "Removed item %s (%s)", record.id, record.name, extra={"record_id": record.id}
        )
        self._persist()
        return record.name

    def search(self, query: str) -> List[InventoryRecord]:
        return search_records(self._records, query)

    def low_stock(self, threshold: Optional[int] = None) -> List[InventoryRecord]:
        if threshold is None:
            threshold = self.low_stock_threshold
        return low_stock_records(self._records, threshold)

    def summary(self) -> Dict[str, Any]:
        return {
            "items": len(self._records),
            "units": sum(record.quantity for record in self._records),
            "value": round(sum(record.price * record.quantity for record in self._records), 2),
            "low_stock": len(self.low_stock()),
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self) -> None:
        self.storage.save_all(self._records)
        self.last_save_error = None

    def reload(self) -> None:
        """Replace the in-memory records with the file contents.

        The identifier counter never moves backwards.
        """

        counter = self._next_id
        loaded = self.storage.load()
        self._records = []
        self._populate(loaded)
        self._next_id = max(self._next_id, counter)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _populate(self, records: List[InventoryRecord]) -> None:
        seen: Dict[int, InventoryRecord] = {}
        for record in records:
            if record.id in seen:
                logger.warning(
                    "Ignoring duplicate item ID %s (%s) in %s",
                    record.id,
                    record.name,
                    self.storage_path,
                )
                continue
            seen[record.id] = record
            self._records.append(record)
        if seen:
            self._next_id = max(self._next_id, max(seen) + 1)

    def _index_of(self, record_id: int) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(record_id)

    def _persist(self) -> None:
        try:
            self.save()
        except PersistenceError as exc:
            self.last_save_error = exc
            logger.error("Inventory changes were not saved: %s", exc)


__all__ = ["InventoryManager"]
