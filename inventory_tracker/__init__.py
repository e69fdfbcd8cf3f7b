"""Inventory tracker package."""
from __future__ import annotations

from typing import Any

from .inventory import InventoryManager
from .records import (
    ElectronicsRecord,
    GenericRecord,
    GroceryRecord,
    InventoryRecord,
    ItemKind,
)

__all__ = [
    "create_app",
    "ElectronicsRecord",
    "GenericRecord",
    "GroceryRecord",
    "InventoryManager",
    "InventoryRecord",
    "ItemKind",
]


def __getattr__(name: str) -> Any:
    # Flask is only imported when the API factory is requested.
    if name == "create_app":
        from .app import create_app

        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
