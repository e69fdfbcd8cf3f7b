"""Exceptions raised by the inventory core."""
from __future__ import annotations


class InventoryError(Exception):
    """Base class for every error raised by the inventory core."""


class RecordValidationError(InventoryError, ValueError):
    """A record field failed validation; nothing was constructed or stored."""


class DecodeError(InventoryError, ValueError):
    """A persisted line could not be turned back into a record."""


class RecordNotFoundError(InventoryError, KeyError):
    """No record with the requested identifier exists."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Item with ID {record_id} not found")
        self.record_id = record_id

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateRecordError(InventoryError, ValueError):
    """A record with the same identifier is already stored."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Item with ID {record_id} already exists")
        self.record_id = record_id


class MissingRecordError(InventoryError, ValueError):
    """``None`` was passed where a record was expected."""


class InsufficientStockError(InventoryError, ValueError):
    """A stock adjustment would drive the quantity below zero."""

    def __init__(self, record_id: int, quantity: int, delta: int) -> None:
        super().__init__(
            f"Insufficient stock for item {record_id}: "
            f"{quantity} available, adjustment of {delta} requested"
        )
        self.record_id = record_id
        self.quantity = quantity
        self.delta = delta


class PersistenceError(InventoryError, OSError):
    """The inventory file could not be read or written."""


__all__ = [
    "InventoryError",
    "RecordValidationError",
    "DecodeError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "MissingRecordError",
    "InsufficientStockError",
    "PersistenceError",
]
