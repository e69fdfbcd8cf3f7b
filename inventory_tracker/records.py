"""Inventory record model.

Every record is one of a closed set of kinds. The kinds share the common
``id``/``name``/``price``/``quantity`` fields and add their own payload.
Records are frozen; the inventory manager swaps in an updated copy when the
stock level changes.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Type

from .errors import RecordValidationError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DATE = "2024-12-31"
DEFAULT_GENERIC_CATEGORY = "General"

_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# The flat file has no escaping, so these can never appear in a text field.
_FORBIDDEN_CHARACTERS = (",", "\n", "\r")
_COMMON_FIELDS = frozenset({"id", "name", "price", "quantity"})


class ItemKind(str, Enum):
    ELECTRONICS = "Electronics"
    GROCERY = "Grocery"
    GENERIC = "Generic"


def parse_kind(value: Any) -> ItemKind:
    """Resolve a kind tag case-insensitively."""

    if isinstance(value, ItemKind):
        return value
    candidate = str(value or "").strip().lower()
    for kind in ItemKind:
        if kind.value.lower() == candidate:
            return kind
    raise RecordValidationError(f"Unknown item kind '{value}'")


def is_valid_date(value: str) -> bool:
    return bool(_DATE_SHAPE.match(value))


def _check_text(field_name: str, value: Any, *, required: bool = False) -> str:
    if not isinstance(value, str):
        raise RecordValidationError(f"{field_name} must be text")
    text = value.strip()
    if required and not text:
        raise RecordValidationError(f"{field_name} cannot be empty")
    if any(char in text for char in _FORBIDDEN_CHARACTERS):
        raise RecordValidationError(f"{field_name} cannot contain commas or line breaks")
    return text


@dataclass(frozen=True)
class InventoryRecord:
    """Fields shared by every kind of inventory record."""

    id: int
    name: str
    price: float
    quantity: int

    kind: ClassVar[ItemKind]

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1:
            raise RecordValidationError("ID must be a positive integer")
        object.__setattr__(self, "name", _check_text("Name", self.name, required=True))
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise RecordValidationError("Price must be a number")
        if not math.isfinite(self.price):
            raise RecordValidationError("Price must be a finite number")
        if self.price < 0:
            raise RecordValidationError("Price cannot be negative")
        object.__setattr__(self, "price", float(self.price))
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise RecordValidationError("Quantity must be an integer")
        if self.quantity < 0:
            raise RecordValidationError("Quantity cannot be negative")
        self._validate_details()

    def _validate_details(self) -> None:
        raise NotImplementedError

    def detail_values(self) -> Tuple[Any, ...]:
        """Kind-specific values, in their persisted order."""

        raise NotImplementedError

    def search_fields(self) -> Tuple[str, ...]:
        """Category-like texts matched by free-text search."""

        raise NotImplementedError

    def additional_info(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["kind"] = self.kind.value
        payload["additional_info"] = self.additional_info()
        return payload


@dataclass(frozen=True)
class ElectronicsRecord(InventoryRecord):
    brand: str = ""
    warranty_months: int = 0

    kind: ClassVar[ItemKind] = ItemKind.ELECTRONICS

    def _validate_details(self) -> None:
        object.__setattr__(self, "brand", _check_text("Brand", self.brand))
        if isinstance(self.warranty_months, bool) or not isinstance(self.warranty_months, int):
            raise RecordValidationError("Warranty must be a whole number of months")
        object.__setattr__(self, "warranty_months", max(0, self.warranty_months))

    def detail_values(self) -> Tuple[Any, ...]:
        return (self.brand, self.warranty_months)

    def search_fields(self) -> Tuple[str, ...]:
        return (self.kind.value, self.brand)

    def additional_info(self) -> str:
        return f"Brand: {self.brand}, Warranty: {self.warranty_months} months"


@dataclass(frozen=True)
class GroceryRecord(InventoryRecord):
    expiry_date: str = DEFAULT_EXPIRY_DATE
    category: str = ""

    kind: ClassVar[ItemKind] = ItemKind.GROCERY

    def _validate_details(self) -> None:
        expiry = self.expiry_date.strip() if isinstance(self.expiry_date, str) else ""
        if not is_valid_date(expiry):
            logger.warning(
                "Invalid expiry date %r for item %s, using %s",
                self.expiry_date,
                self.id,
                DEFAULT_EXPIRY_DATE,
            )
            expiry = DEFAULT_EXPIRY_DATE
        object.__setattr__(self, "expiry_date", expiry)
        object.__setattr__(self, "category", _check_text("Category", self.category))

    def detail_values(self) -> Tuple[Any, ...]:
        return (self.expiry_date, self.category)

    def search_fields(self) -> Tuple[str, ...]:
        return (self.category,)

    def additional_info(self) -> str:
        return f"Category: {self.category}, Expires: {self.expiry_date}"


@dataclass(frozen=True)
class GenericRecord(InventoryRecord):
    category: str = DEFAULT_GENERIC_CATEGORY

    kind: ClassVar[ItemKind] = ItemKind.GENERIC

    def _validate_details(self) -> None:
        category = _check_text("Category", self.category)
        object.__setattr__(self, "category", category or DEFAULT_GENERIC_CATEGORY)

    def detail_values(self) -> Tuple[Any, ...]:
        return (self.category,)

    def search_fields(self) -> Tuple[str, ...]:
        return (self.category,)

    def additional_info(self) -> str:
        return f"Category: {self.category}"


RECORD_TYPES: Dict[ItemKind, Type[InventoryRecord]] = {
    ItemKind.ELECTRONICS: ElectronicsRecord,
    ItemKind.GROCERY: GroceryRecord,
    ItemKind.GENERIC: GenericRecord,
}


def build_record(
    kind: Any,
    *,
    id: int,
    name: str,
    price: float,
    quantity: int,
    **details: Any,
) -> InventoryRecord:
    """Construct the record variant for ``kind``.

    Unknown detail fields for the chosen kind are rejected rather than
    silently dropped.
    """

    record_type = RECORD_TYPES[parse_kind(kind)]
    allowed = {item.name for item in fields(record_type)} - _COMMON_FIELDS
    unexpected = sorted(set(details) - allowed)
    if unexpected:
        raise RecordValidationError(
            f"Unexpected fields for {record_type.kind.value}: {', '.join(unexpected)}"
        )
    return record_type(id=id, name=name, price=price, quantity=quantity, **details)


__all__ = [
    "DEFAULT_EXPIRY_DATE",
    "DEFAULT_GENERIC_CATEGORY",
    "ItemKind",
    "InventoryRecord",
    "ElectronicsRecord",
    "GroceryRecord",
    "GenericRecord",
    "RECORD_TYPES",
    "build_record",
    "is_valid_date",
    "parse_kind",
]
