"""
Customer service route tests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import SERVER_TIMING_PATTERN, timing_stages


class TestCreateCustomer:
    def test_create_customer_success(self, customer_client, customer_db):
        response = customer_client.post("/customers", json={"name": "Ada", "email": "ada@example.com"})

        assert response.status_code == 201
        assert response.headers["content-type"] == "application/json"
        data = response.json()
        assert data == {"id": 1, "name": "Ada", "email": "ada@example.com"}
        assert customer_db.insert_count == 1

    def test_create_customer_server_timing(self, customer_client):
        response = customer_client.post("/customers", json={"name": "Ada", "email": "ada@example.com"})

        header = response.headers["server-timing"]
        assert SERVER_TIMING_PATTERN.match(header)
        assert timing_stages(header) == ["conn", "query", "ser"]

    def test_ids_increase(self, customer_client):
        first = customer_client.post("/customers", json={"name": "A", "email": "a@x"}).json()
        second = customer_client.post("/customers", json={"name": "B", "email": "b@x"}).json()
        assert second["id"] > first["id"]

    @pytest.mark.parametrize("payload,message", [
        ({}, "name and email are required"),
        ({"name": "", "email": "ada@example.com"}, "name and email are required"),
        ({"name": "Ada", "email": ""}, "name and email are required"),
        ({"name": "Ada"}, "name and email are required"),
        ({"name": "Ada", "email": None}, "name and email are required"),
        ({"name": "Ada", "email": "ada.example.com"}, "invalid email format"),
        ({"name": "x" * 256, "email": "ada@example.com"}, "name must be 255 characters or less"),
        ({"name": "Ada", "email": "a@" + "x" * 254}, "invalid email format"),
    ])
    def test_create_customer_invalid_fields(self, customer_client, customer_db, payload, message):
        response = customer_client.post("/customers", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": message}
        assert customer_db.insert_count == 0

    def test_create_customer_boundary_lengths(self, customer_client):
        response = customer_client.post(
            "/customers",
            json={"name": "x" * 255, "email": "a@" + "x" * 253},
        )
        assert response.status_code == 201

    @pytest.mark.parametrize("body", [
        b"not-json",
        b"",
        b"[1, 2]",
        b'{"name": 5, "email": "a@b"}',
    ])
    def test_create_customer_invalid_json(self, customer_client, customer_db, body):
        response = customer_client.post(
            "/customers",
            content=body,
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}
        assert customer_db.insert_count == 0

    def test_create_customer_storage_error(self, customer_app, failing_database):
        customer_app.state.db = failing_database
        client = TestClient(customer_app)

        response = client.post("/customers", json={"name": "Ada", "email": "ada@example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}


class TestReadCustomers:
    def test_round_trip(self, customer_client):
        created = customer_client.post("/customers", json={"name": "Ada", "email": "ada@example.com"}).json()

        response = customer_client.get(f"/customers/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created
        assert SERVER_TIMING_PATTERN.match(response.headers["server-timing"])

    def test_get_missing_customer(self, customer_client):
        response = customer_client.get("/customers/999999")

        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}

    def test_get_non_integer_id(self, customer_client):
        response = customer_client.get("/customers/abc")
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    @pytest.mark.parametrize("customer_id", [
        "-99999999999999999999",
        str(-(2 ** 63) - 1),
        str(2 ** 63),
    ])
    def test_out_of_range_id_never_reaches_store(self, customer_app, method, customer_id):
        db = MagicMock()
        db.get_customer = AsyncMock(return_value=None)
        db.delete_customer = AsyncMock(return_value=0)
        customer_app.state.db = db

        response = TestClient(customer_app).request(method, f"/customers/{customer_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request parameters"}
        db.get_customer.assert_not_awaited()
        db.delete_customer.assert_not_awaited()

    def test_int64_min_id_is_accepted(self, customer_client):
        response = customer_client.get(f"/customers/{-(2 ** 63)}")

        assert response.status_code == 404

    def test_list_customers(self, customer_client):
        customer_client.post("/customers", json={"name": "Ada", "email": "ada@example.com"})
        customer_client.post("/customers", json={"name": "Bob", "email": "bob@example.com"})

        response = customer_client.get("/customers")

        assert response.status_code == 200
        names = sorted(c["name"] for c in response.json())
        assert names == ["Ada", "Bob"]
        assert timing_stages(response.headers["server-timing"]) == ["conn", "query", "ser"]

    def test_list_customers_empty(self, customer_client):
        response = customer_client.get("/customers")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_customers_storage_error(self, customer_app, failing_database):
        customer_app.state.db = failing_database
        response = TestClient(customer_app).get("/customers")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}


class TestDeleteCustomer:
    def test_delete_existing_customer(self, customer_client):
        created = customer_client.post("/customers", json={"name": "Ada", "email": "ada@example.com"}).json()

        response = customer_client.delete(f"/customers/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert timing_stages(response.headers["server-timing"]) == ["conn", "query"]

        assert customer_client.get(f"/customers/{created['id']}").status_code == 404

    def test_delete_missing_customer(self, customer_client):
        response = customer_client.delete("/customers/12345")

        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}


class TestPingAndFallback:
    def test_ping(self, customer_client):
        response = customer_client.get("/customers/ping")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert isinstance(data["conn_ms"], float)
        assert isinstance(data["query_ms"], float)

    def test_ping_storage_error(self, customer_app, failing_database):
        customer_app.state.db = failing_database
        response = TestClient(customer_app).get("/customers/ping")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}

    def test_healthz(self, customer_client):
        response = customer_client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.parametrize("method,path", [
        ("PUT", "/customers/1"),
        ("PATCH", "/customers"),
        ("DELETE", "/customers"),
        ("GET", "/unknown"),
        ("GET", "/customers/"),
    ])
    def test_method_not_allowed(self, customer_client, method, path):
        response = customer_client.request(method, path)

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert response.headers["content-type"] == "application/json"
