from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from inventory_tracker.app import create_app
from inventory_tracker.config import Settings
from inventory_tracker.inventory import InventoryManager


@pytest.fixture()
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "inventory_data.txt"


@pytest.fixture()
def manager(storage_path: Path) -> InventoryManager:
    return InventoryManager(storage_path)


@pytest.fixture()
def test_settings(storage_path: Path) -> Settings:
    return Settings(
        data_file=storage_path,
        environment="test",
        low_stock_threshold=5,
        log_level="DEBUG",
    )


@pytest.fixture()
def app(test_settings: Settings) -> Iterator[Flask]:
    app = create_app(settings=test_settings)
    app.config.update(TESTING=True)
    yield app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
