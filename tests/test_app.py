from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from flask.testing import FlaskClient

from inventory_tracker import create_app
from inventory_tracker.config import Settings
from inventory_tracker.inventory import InventoryManager


def _create(client: FlaskClient, **payload: Any) -> Dict[str, Any]:
    response = client.post("/api/items", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def _seed(client: FlaskClient) -> None:
    _create(
        client,
        kind="Electronics",
        name="Laptop",
        price=999.99,
        quantity=5,
        brand="Dell",
        warranty_months=12,
    )
    _create(client, kind="Generic", name="Mouse", price=19.99, quantity=4, category="Accessories")


def test_health(client: FlaskClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "environment": "test"}


def test_create_and_list_items(client: FlaskClient, storage_path: Path) -> None:
    assert client.get("/api/items").get_json() == []

    created = _create(
        client,
        kind="Grocery",
        name="Milk",
        price=1.5,
        quantity=12,
        expiry_date="2026-03-01",
        category="Dairy",
    )

    assert created["id"] == 1
    assert created["kind"] == "Grocery"
    assert created["expiry_date"] == "2026-03-01"
    assert "warning" not in created
    items = client.get("/api/items").get_json()
    assert [item["name"] for item in items] == ["Milk"]
    assert storage_path.read_text(encoding="utf-8") == "1,Grocery,Milk,1.5,12,2026-03-01,Dairy\n"


def test_create_rejects_invalid_payloads(client: FlaskClient) -> None:
    bad_payloads = [
        {"kind": "Generic", "name": "Pen", "price": -1, "quantity": 1},
        {"kind": "Generic", "name": "Pen", "price": 1, "quantity": -1},
        {"kind": "Generic", "name": "", "price": 1, "quantity": 1},
        {"kind": "Furniture", "name": "Chair", "price": 1, "quantity": 1},
        {"kind": "Grocery", "name": "Milk", "price": 1, "quantity": 1, "expiry_date": "soon"},
        {"kind": "Generic", "name": "Pen", "price": 1},
    ]
    for payload in bad_payloads:
        response = client.post("/api/items", json=payload)
        assert response.status_code == 400, payload
        assert "error" in response.get_json()
    assert client.get("/api/items").get_json() == []


def test_create_rejects_commas(client: FlaskClient) -> None:
    response = client.post(
        "/api/items",
        json={"kind": "Generic", "name": "Pen, blue", "price": 1, "quantity": 1},
    )
    assert response.status_code == 400
    assert "commas" in response.get_json()["error"]


def test_get_item(client: FlaskClient) -> None:
    _seed(client)
    response = client.get("/api/items/1")
    assert response.status_code == 200
    assert response.get_json()["brand"] == "Dell"
    assert client.get("/api/items/99").status_code == 404


def test_adjust_stock(client: FlaskClient) -> None:
    _seed(client)

    added = client.post("/api/items/2/stock", json={"action": "add", "quantity": 6})
    assert added.status_code == 200
    assert added.get_json()["quantity"] == 10

    removed = client.post("/api/items/2/stock", json={"action": "remove", "quantity": 10})
    assert removed.status_code == 200
    assert removed.get_json()["quantity"] == 0

    too_many = client.post("/api/items/2/stock", json={"action": "remove", "quantity": 1})
    assert too_many.status_code == 409
    assert client.get("/api/items/2").get_json()["quantity"] == 0

    invalid = client.post("/api/items/2/stock", json={"action": "add", "quantity": 0})
    assert invalid.status_code == 400

    missing = client.post("/api/items/42/stock", json={"action": "add", "quantity": 1})
    assert missing.status_code == 404


def test_delete_item(client: FlaskClient) -> None:
    _seed(client)
    response = client.delete("/api/items/1")
    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "removed": "Laptop"}
    assert client.delete("/api/items/1").status_code == 404
    assert [item["id"] for item in client.get("/api/items").get_json()] == [2]


def test_search_and_low_stock(client: FlaskClient) -> None:
    _seed(client)

    assert [item["id"] for item in client.get("/api/search?q=lap").get_json()] == [1]
    assert [item["id"] for item in client.get("/api/search?q=ACCESSORIES").get_json()] == [2]
    assert client.get("/api/search?q=").get_json() == []
    assert [item["id"] for item in client.get("/api/search?q=1").get_json()] == [1]

    assert [item["id"] for item in client.get("/api/low-stock").get_json()] == [2]
    assert [item["id"] for item in client.get("/api/low-stock?threshold=6").get_json()] == [1, 2]
    assert client.get("/api/low-stock?threshold=abc").status_code == 400
    assert client.get("/api/low-stock?threshold=-1").status_code == 400


def test_summary(client: FlaskClient) -> None:
    _seed(client)
    summary = client.get("/api/summary").get_json()
    assert summary["items"] == 2
    assert summary["units"] == 9
    assert summary["low_stock"] == 1


def test_app_loads_existing_file(tmp_path: Path) -> None:
    storage = tmp_path / "inventory.txt"
    storage.write_text("4,Generic,Pen,1.0,2,Office\n", encoding="utf-8")
    settings = Settings(data_file=tmp_path / "unused.txt", environment="test")

    app = create_app(storage, settings=settings)
    manager = app.extensions["inventory_manager"]

    assert isinstance(manager, InventoryManager)
    assert manager.storage_path == storage
    client = app.test_client()
    assert client.get("/api/items/4").get_json()["category"] == "Office"
    created = client.post(
        "/api/items", json={"kind": "Generic", "name": "Ink", "price": 2, "quantity": 3}
    ).get_json()
    assert created["id"] == 5


def test_mutation_reports_failed_save(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    settings = Settings(data_file=blocker / "inventory.txt", environment="test")
    client = create_app(settings=settings).test_client()

    response = client.post(
        "/api/items", json={"kind": "Generic", "name": "Pen", "price": 1, "quantity": 1}
    )

    assert response.status_code == 201
    assert "not saved" in response.get_json()["warning"]
    assert len(client.get("/api/items").get_json()) == 1


def test_create_accepts_any_case_kind(client: FlaskClient) -> None:
    created = _create(
        client, kind="electronics", name="Phone", price=499.0, quantity=2, brand="Acme"
    )

    assert created["kind"] == "Electronics"
    assert created["brand"] == "Acme"


def test_package_exports_app_factory() -> None:
    import inventory_tracker
    from inventory_tracker import app as app_module

    assert inventory_tracker.create_app is app_module.create_app
