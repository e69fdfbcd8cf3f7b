from __future__ import annotations

import dataclasses
import logging

import pytest

from inventory_tracker.errors import RecordValidationError
from inventory_tracker.records import (
    DEFAULT_EXPIRY_DATE,
    ElectronicsRecord,
    GenericRecord,
    GroceryRecord,
    ItemKind,
    build_record,
    parse_kind,
)


def test_electronics_clamps_negative_warranty() -> None:
    record = ElectronicsRecord(1, "Laptop", 999.99, 3, brand="Dell", warranty_months=-6)
    assert record.warranty_months == 0
    assert record.kind is ItemKind.ELECTRONICS
    assert record.additional_info() == "Brand: Dell, Warranty: 0 months"


def test_grocery_invalid_date_uses_sentinel(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="inventory_tracker.records"):
        record = GroceryRecord(2, "Milk", 1.5, 10, expiry_date="31/12/2025", category="Dairy")
    assert record.expiry_date == DEFAULT_EXPIRY_DATE
    assert "Invalid expiry date" in caplog.text


def test_grocery_keeps_valid_date() -> None:
    record = GroceryRecord(2, "Milk", 1.5, 10, expiry_date="2026-01-15", category="Dairy")
    assert record.expiry_date == "2026-01-15"
    assert record.additional_info() == "Category: Dairy, Expires: 2026-01-15"


def test_generic_defaults_category() -> None:
    assert GenericRecord(3, "Box", 2, 1).category == "General"
    assert GenericRecord(3, "Box", 2, 1, category="  ").category == "General"


def test_price_is_normalized_to_float() -> None:
    record = GenericRecord(4, "Tape", 3, 2)
    assert isinstance(record.price, float)
    assert record.price == 3.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "price": 1.0, "quantity": 1},
        {"name": "   ", "price": 1.0, "quantity": 1},
        {"name": "Pen", "price": -0.01, "quantity": 1},
        {"name": "Pen", "price": float("nan"), "quantity": 1},
        {"name": "Pen", "price": 1.0, "quantity": -1},
        {"name": "Pen, blue", "price": 1.0, "quantity": 1},
    ],
)
def test_invalid_common_fields_are_rejected(kwargs) -> None:
    with pytest.raises(RecordValidationError):
        GenericRecord(id=1, **kwargs)


def test_identifier_must_be_positive() -> None:
    with pytest.raises(RecordValidationError):
        GenericRecord(0, "Pen", 1.0, 1)


def test_text_payload_rejects_commas() -> None:
    with pytest.raises(RecordValidationError):
        ElectronicsRecord(1, "TV", 100.0, 1, brand="Acme, Inc")


def test_records_are_immutable() -> None:
    record = GenericRecord(1, "Pen", 1.0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.quantity = 5  # type: ignore[misc]


def test_build_record_dispatches_on_kind() -> None:
    record = build_record("grocery", id=5, name="Bread", price=2.0, quantity=4, category="Bakery")
    assert isinstance(record, GroceryRecord)
    assert record.category == "Bakery"


def test_build_record_rejects_fields_of_other_kinds() -> None:
    with pytest.raises(RecordValidationError):
        build_record(ItemKind.GENERIC, id=1, name="Pen", price=1.0, quantity=1, brand="Bic")


def test_parse_kind_rejects_unknown_tag() -> None:
    with pytest.raises(RecordValidationError):
        parse_kind("Furniture")


def test_to_dict_includes_kind_and_payload() -> None:
    payload = ElectronicsRecord(1, "Laptop", 999.99, 3, brand="Dell", warranty_months=12).to_dict()
    assert payload == {
        "id": 1,
        "name": "Laptop",
        "price": 999.99,
        "quantity": 3,
        "brand": "Dell",
        "warranty_months": 12,
        "kind": "Electronics",
        "additional_info": "Brand: Dell, Warranty: 12 months",
    }
