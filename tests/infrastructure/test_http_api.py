"""End-to-end tests for the HTTP API over an in-memory repository."""

import pytest
from fastapi.testclient import TestClient

from catalog.application.product_service import ProductService
from catalog.infrastructure.config import Settings
from catalog.infrastructure.http.app import create_app
from tests.fakes import FakeProductRepository

BASE = "/api/v1/products"

IPHONE = {"name": "iPhone 15 Pro", "sku": "IPH-1", "price": 999.99, "stockQuantity": 5}


class ExplodingRepository(FakeProductRepository):
    def find_all(self):
        raise RuntimeError("disk on fire")


def _client(repo: FakeProductRepository | None = None, **kwargs) -> TestClient:
    settings = Settings(environment="test")
    app = create_app(service=ProductService(repo or FakeProductRepository()), settings=settings)
    return TestClient(app, **kwargs)


@pytest.fixture
def client():
    return _client()


def _create(client: TestClient, **overrides) -> dict:
    response = client.post(BASE, json={**IPHONE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreate:

    def test_created(self, client):
        response = client.post(BASE, json=IPHONE)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        data = body["data"]
        assert data["price"] == 999.99
        assert data["currency"] == "USD"
        assert data["stockQuantity"] == 5
        assert data["isActive"] is True
        assert data["id"]

    def test_duplicate_sku(self, client):
        _create(client)
        response = client.post(BASE, json={**IPHONE, "name": "Other"})

        assert response.status_code == 409
        body = response.json()
        assert body["status"] == "fail"
        assert body["data"]["code"] == 4091
        assert body["data"]["statusCode"] == 409
        assert body["data"]["path"] == BASE
        assert "IPH-1" in body["data"]["message"]

    @pytest.mark.parametrize(
        "overrides, code",
        [
            ({"price": -1}, 4003),
            ({"stockQuantity": -1}, 4004),
            ({"currency": "GBP"}, 4005),
        ],
    )
    def test_domain_validation_errors(self, client, overrides, code):
        response = client.post(BASE, json={**IPHONE, **overrides})
        assert response.status_code == 400
        assert response.json()["status"] == "fail"
        assert response.json()["data"]["code"] == code

    def test_request_validation_errors(self, client):
        response = client.post(BASE, json={"name": "", "sku": "X", "price": 1})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        errors = body["data"]["errors"]
        assert "name" in errors
        assert "stockQuantity" in errors

    def test_invalid_image_url(self, client):
        response = client.post(BASE, json={**IPHONE, "images": ["nope"]})
        assert response.status_code == 400
        assert "images" in response.json()["data"]["errors"]


class TestRead:

    def test_get_by_id(self, client):
        created = _create(client)
        response = client.get(f"{BASE}/{created['id']}")
        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_missing(self, client):
        response = client.get(f"{BASE}/missing")
        assert response.status_code == 404
        assert response.json()["status"] == "fail"
        assert response.json()["data"]["code"] == 4041

    def test_list(self, client):
        _create(client, sku="A")
        _create(client, sku="B")
        response = client.get(BASE)
        assert response.status_code == 200
        assert [p["sku"] for p in response.json()["data"]] == ["A", "B"]

    def test_list_filters(self, client):
        _create(client, sku="P", name="Pixel 8", category="Phones", brand="Google")
        _create(client, sku="L", name="ThinkPad", category="Laptops", price=1500, stockQuantity=0)

        def skus(params):
            return [p["sku"] for p in client.get(BASE, params=params).json()["data"]]

        assert skus({"search": "google"}) == ["P"]
        assert skus({"category": "laptop"}) == ["L"]
        assert skus({"min_price": 1000}) == ["L"]
        assert skus({"max_price": 1000}) == ["P"]
        assert skus({"in_stock": "true"}) == ["P"]
        assert skus({"active": "true"}) == ["P", "L"]

    def test_bad_price_range(self, client):
        response = client.get(BASE, params={"min_price": 10, "max_price": 5})
        assert response.status_code == 400


class TestUpdate:

    def test_patch(self, client):
        created = _create(client)
        response = client.patch(
            f"{BASE}/{created['id']}", json={"name": "iPhone 16", "currency": "EUR"}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "iPhone 16"
        assert data["currency"] == "EUR"
        assert data["price"] == 999.99

    def test_patch_missing(self, client):
        response = client.patch(f"{BASE}/missing", json={"name": "X"})
        assert response.status_code == 404

    def test_patch_taken_sku(self, client):
        _create(client, sku="TAKEN")
        mine = _create(client, sku="MINE")
        response = client.patch(f"{BASE}/{mine['id']}", json={"sku": "TAKEN"})
        assert response.status_code == 409

    def test_patch_deactivate_is_ignored(self, client):
        created = _create(client)
        response = client.patch(f"{BASE}/{created['id']}", json={"isActive": False})
        assert response.status_code == 200
        assert response.json()["data"]["isActive"] is True


class TestDelete:

    def test_delete(self, client):
        created = _create(client)
        response = client.delete(f"{BASE}/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"{BASE}/{created['id']}").status_code == 404
        assert client.get(BASE).json()["data"] == []

    def test_delete_missing(self, client):
        assert client.delete(f"{BASE}/missing").status_code == 404


class TestStock:

    def test_add_and_reduce(self, client):
        created = _create(client)
        added = client.post(f"{BASE}/{created['id']}/stock/add", json={"quantity": 3})
        assert added.json()["data"]["stockQuantity"] == 8

        reduced = client.post(f"{BASE}/{created['id']}/stock/reduce", json={"quantity": 8})
        assert reduced.json()["data"]["stockQuantity"] == 0

    def test_reduce_too_much(self, client):
        created = _create(client)
        response = client.post(f"{BASE}/{created['id']}/stock/reduce", json={"quantity": 6})
        assert response.status_code == 400
        assert response.json()["data"]["code"] == 4008


class TestPlumbing:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "success"

    def test_request_id_echoed(self, client):
        response = client.get(BASE, headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, client):
        assert client.get(BASE).headers["X-Request-ID"]

    def test_unexpected_failure_is_an_error_envelope(self):
        client = _client(ExplodingRepository(), raise_server_exceptions=False)
        response = client.get(BASE)

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Internal server error occurred."
        assert body["code"] == 5001
        assert body["data"]["path"] == BASE
        assert body["data"]["method"] == "GET"
        assert "disk on fire" not in response.text

    def test_unexpected_failure_keeps_request_id(self):
        client = _client(ExplodingRepository())
        response = client.get(BASE, headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req-500"
        assert response.json()["code"] == 5001
