"""Pydantic schemas for requests accepted by the HTTP API."""
from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .records import ItemKind, parse_kind

_KIND_FIELDS: Dict[ItemKind, tuple[str, ...]] = {
    ItemKind.ELECTRONICS: ("brand", "warranty_months"),
    ItemKind.GROCERY: ("expiry_date", "category"),
    ItemKind.GENERIC: ("category",),
}


class ItemCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    kind: ItemKind
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int = Field(..., ge=0)
    brand: str | None = None
    warranty_months: int | None = Field(default=None, ge=0)
    expiry_date: str | None = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Expiry date in YYYY-MM-DD form.",
    )
    category: str | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value: Any) -> ItemKind:
        return parse_kind(value)

    def details(self) -> Dict[str, Any]:
        """Kind-specific fields that were supplied for :attr:`kind`."""

        return self.model_dump(include=set(_KIND_FIELDS[self.kind]), exclude_none=True)


class StockAdjustment(BaseModel):
    action: Literal["add", "remove"] = Field(..., description="Add to or remove from stock.")
    quantity: int = Field(..., gt=0)

    @property
    def delta(self) -> int:
        return self.quantity if self.action == "add" else -self.quantity


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str


__all__ = ["ItemCreate", "StockAdjustment", "HealthStatus"]
