"""Flask application exposing the inventory operations as a JSON API."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import (
    DuplicateRecordError,
    InsufficientStockError,
    RecordNotFoundError,
    RecordValidationError,
)
from .inventory import InventoryManager
from .records import InventoryRecord
from .schemas import HealthStatus, ItemCreate, StockAdjustment


def _validation_messages(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def create_app(
    storage_path: str | Path | None = None,
    *,
    settings: Optional[Settings] = None,
) -> Flask:
    settings = settings or get_settings()
    storage_path = Path(storage_path) if storage_path is not None else settings.data_file
    app = Flask(__name__)
    app.config["INVENTORY_ENVIRONMENT"] = settings.environment

    manager = InventoryManager(
        storage_path=storage_path,
        low_stock_threshold=settings.low_stock_threshold,
    )
    app.extensions["inventory_manager"] = manager

    def _json_error(message: str, status: int = 400, **extra: Any) -> Any:
        payload: Dict[str, Any] = {"error": message}
        payload.update(extra)
        return jsonify(payload), status

    def _get_payload() -> Mapping[str, Any]:
        payload = request.get_json(silent=True)
        if isinstance(payload, dict):
            return payload
        return request.form.to_dict()

    def _with_save_status(payload: Dict[str, Any]) -> Dict[str, Any]:
        if manager.last_save_error is not None:
            payload["warning"] = f"Changes were not saved: {manager.last_save_error}"
        return payload

    def _serialize(records: List[InventoryRecord]) -> Any:
        return jsonify([record.to_dict() for record in records])

    def _parse_threshold(value: Optional[str]) -> Optional[int]:
        if value is None or value.strip() == "":
            return None
        try:
            threshold = int(value.strip())
        except ValueError:
            raise RecordValidationError("Threshold must be an integer") from None
        if threshold < 0:
            raise RecordValidationError("Threshold cannot be negative")
        return threshold

    @app.get("/api/health")
    def health_check() -> Any:
        return jsonify(HealthStatus(environment=settings.environment).model_dump())

    @app.get("/api/items")
    def list_items() -> Any:
        return _serialize(manager.list_items())

    @app.post("/api/items")
    def create_item() -> Any:
        try:
            data = ItemCreate.model_validate(dict(_get_payload()))
        except ValidationError as exc:
            messages = _validation_messages(exc)
            return _json_error(messages[0], 400, details=messages)
        try:
            record = manager.create(
                data.kind, data.name, data.price, data.quantity, **data.details()
            )
        except RecordValidationError as exc:
            return _json_error(str(exc), 400)
        except DuplicateRecordError as exc:
            return _json_error(str(exc), 409)
        return jsonify(_with_save_status(record.to_dict())), 201

    @app.get("/api/items/<int:record_id>")
    def get_item(record_id: int) -> Any:
        try:
            record = manager.find_by_id(record_id)
        except RecordNotFoundError as exc:
            return _json_error(str(exc), 404)
        return jsonify(record.to_dict())

    @app.post("/api/items/<int:record_id>/stock")
    def adjust_stock(record_id: int) -> Any:
        try:
            adjustment = StockAdjustment.model_validate(dict(_get_payload()))
        except ValidationError as exc:
            messages = _validation_messages(exc)
            return _json_error(messages[0], 400, details=messages)
        try:
            manager.update_stock(record_id, adjustment.delta)
        except RecordNotFoundError as exc:
            return _json_error(str(exc), 404)
        except InsufficientStockError as exc:
            return _json_error(str(exc), 409)
        record = manager.find_by_id(record_id)
        return jsonify(_with_save_status(record.to_dict()))

    @app.delete("/api/items/<int:record_id>")
    def delete_item(record_id: int) -> Any:
        try:
            name = manager.remove(record_id)
        except RecordNotFoundError as exc:
            return _json_error(str(exc), 404)
        return jsonify(_with_save_status({"id": record_id, "removed": name}))

    @app.get("/api/search")
    def search_items() -> Any:
        return _serialize(manager.search(request.args.get("q", "")))

    @app.get("/api/low-stock")
    def low_stock() -> Any:
        try:
            threshold = _parse_threshold(request.args.get("threshold"))
        except RecordValidationError as exc:
            return _json_error(str(exc), 400)
        return _serialize(manager.low_stock(threshold))

    @app.get("/api/summary")
    def summary() -> Any:
        return jsonify(manager.summary())

    return app


__all__ = ["create_app"]
