"""Application configuration objects."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pydantic settings used to configure the tracker."""

    data_file: Path = Field(
        default=Path("inventory_data.txt"),
        description="Flat file the inventory is loaded from and saved to.",
    )
    low_stock_threshold: int = Field(
        default=5,
        ge=0,
        description="Items with fewer units than this are reported as low stock.",
    )
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Deployment environment flag used for logging.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    json_logs: bool = Field(default=False, description="Emit logs as JSON lines.")
    api_host: str = Field(default="127.0.0.1", description="Bind address for the HTTP API.")
    api_port: int = Field(default=5000, ge=1, le=65535, description="Port for the HTTP API.")

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of :class:`Settings`."""

    return Settings()


__all__ = ["Settings", "get_settings"]
