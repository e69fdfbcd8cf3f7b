"""Line codec for the flat inventory file.

A record is stored as::

    id,kind,name,price,quantity,<kind-specific fields>

Electronics append ``brand,warranty_months``; groceries append
``expiry_date,category``; generic items append ``category``. Nothing is
escaped, which is why record text fields refuse commas.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from .errors import DecodeError, RecordValidationError
from .records import (
    DEFAULT_EXPIRY_DATE,
    DEFAULT_GENERIC_CATEGORY,
    InventoryRecord,
    ItemKind,
    build_record,
    parse_kind,
)

logger = logging.getLogger(__name__)

DELIMITER = ","
MIN_TOKENS = 5


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def encode_record(record: InventoryRecord) -> str:
    values = [
        record.id,
        record.kind.value,
        record.name,
        record.price,
        record.quantity,
        *record.detail_values(),
    ]
    return DELIMITER.join(_format_value(value) for value in values)


def _parse_int(token: str, field_name: str) -> int:
    try:
        return int(token.strip())
    except ValueError as exc:
        raise DecodeError(f"Invalid {field_name} {token!r}") from exc


def _parse_float(token: str, field_name: str) -> float:
    try:
        return float(token.strip())
    except ValueError as exc:
        raise DecodeError(f"Invalid {field_name} {token!r}") from exc


def _electronics_details(tokens: List[str]) -> Dict[str, Any]:
    brand = tokens[0].strip() if tokens else ""
    warranty = 0
    if len(tokens) > 1:
        try:
            warranty = int(tokens[1].strip())
        except ValueError:
            logger.debug("Unreadable warranty %r, defaulting to 0", tokens[1])
    return {"brand": brand, "warranty_months": warranty}


def _grocery_details(tokens: List[str]) -> Dict[str, Any]:
    expiry = tokens[0].strip() if tokens else DEFAULT_EXPIRY_DATE
    category = tokens[1].strip() if len(tokens) > 1 else ""
    return {"expiry_date": expiry, "category": category}


def _generic_details(tokens: List[str]) -> Dict[str, Any]:
    category = tokens[0].strip() if tokens else ""
    return {"category": category or DEFAULT_GENERIC_CATEGORY}


_DETAIL_PARSERS: Dict[ItemKind, Callable[[List[str]], Dict[str, Any]]] = {
    ItemKind.ELECTRONICS: _electronics_details,
    ItemKind.GROCERY: _grocery_details,
    ItemKind.GENERIC: _generic_details,
}


def decode_record(line: str) -> InventoryRecord:
    """Rebuild a record from one persisted line.

    Raises :class:`DecodeError` when the common fields are missing or
    unreadable, the kind tag is unknown, or the values fail validation.
    Kind-specific fields are read on a best-effort basis: absent or
    unreadable ones fall back to the kind's defaults.
    """

    tokens = line.rstrip("\r\n").split(DELIMITER)
    if len(tokens) < MIN_TOKENS:
        raise DecodeError(f"Expected at least {MIN_TOKENS} fields, got {len(tokens)}")
    record_id = _parse_int(tokens[0], "id")
    try:
        kind = parse_kind(tokens[1])
    except RecordValidationError as exc:
        raise DecodeError(str(exc)) from exc
    price = _parse_float(tokens[3], "price")
    quantity = _parse_int(tokens[4], "quantity")
    details = _DETAIL_PARSERS[kind](tokens[MIN_TOKENS:])
    try:
        return build_record(
            kind,
            id=record_id,
            name=tokens[2],
            price=price,
            quantity=quantity,
            **details,
        )
    except RecordValidationError as exc:
        raise DecodeError(str(exc)) from exc


__all__ = ["DELIMITER", "MIN_TOKENS", "decode_record", "encode_record"]
