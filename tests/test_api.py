# tests/test_api.py
"""HTTP surface: caller resolution and the error-to-status mapping."""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from app.database import get_db
from app.main import app
from tests.factories import add_client, add_sale, add_vehicle


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def as_(caller):
    return {"X-User-Id": caller.user_id}


class TestCallerResolution:
    def test_health_needs_no_caller(self, client):
        res = client.get("/api/v1/health")
        assert res.status_code == 200
        assert res.json()["database"] == "ok"

    def test_missing_header_is_401(self, client, world):
        assert client.get("/api/v1/vehicles").status_code == 401

    def test_unknown_identity_is_401(self, client, world):
        assert client.get("/api/v1/vehicles", headers={"X-User-Id": "nobody"}).status_code == 401

    def test_register_identity_returns_profile(self, client):
        res = client.post("/api/v1/identities", json={"email": "sam@example.com", "first_name": "Sam"})
        assert res.status_code == 201
        body = res.json()
        assert (body["first_name"], body["last_name"]) == ("Sam", "New")
        assert body["garage_id"] is None

    def test_me(self, client, world):
        body = client.get("/api/v1/me", headers=as_(world.manager_a)).json()
        assert body["garage_id"] == world.garage_a
        assert body["roles"] == ["employee", "manager"]
        assert body["profile"]["user_id"] == world.manager_a.user_id


class TestErrorMapping:
    def test_invisible_row_is_404(self, client, db, world):
        vehicle = add_vehicle(db, world.garage_a)
        res = client.get(f"/api/v1/vehicles/{vehicle.id}", headers=as_(world.employee_b))
        assert res.status_code == 404
        assert res.json()["error"] == "NotFound"

    def test_denied_write_is_403(self, client, world):
        res = client.post("/api/v1/vehicles", headers=as_(world.employee_a), json={
            "garage_id": world.garage_a, "make": "Renault", "model": "Clio", "year": 2019,
            "price": "9000.00", "fuel_type": "diesel", "condition": "used",
        })
        assert res.status_code == 403
        assert res.json()["error"] == "AuthorizationDenied"

    def test_invalid_enum_is_422(self, client, world):
        res = client.post("/api/v1/vehicles", headers=as_(world.manager_a), json={
            "garage_id": world.garage_a, "make": "Renault", "model": "Clio", "year": 2019,
            "price": "9000.00", "fuel_type": "steam", "condition": "used",
        })
        assert res.status_code == 422

    def test_duplicate_role_is_409(self, client, world):
        res = client.post("/api/v1/roles", headers=as_(world.admin),
                          json={"user_id": world.employee_a.user_id, "role": "employee"})
        assert res.status_code == 409
        assert res.json()["error"] == "ConstraintViolation"


class TestVehiclesAndSales:
    def test_manager_adds_vehicle(self, client, world):
        res = client.post("/api/v1/vehicles", headers=as_(world.manager_a), json={
            "garage_id": world.garage_a, "make": "Renault", "model": "Clio", "year": 2019,
            "price": "9000.00", "fuel_type": "diesel", "condition": "used",
        })
        assert res.status_code == 201
        assert res.json()["is_available"] is True

        listed = client.get("/api/v1/vehicles", headers=as_(world.employee_a)).json()
        assert [v["model"] for v in listed] == ["Clio"]
        assert client.get("/api/v1/vehicles", headers=as_(world.employee_b)).json() == []

    def test_record_sale_flow(self, client, db, world):
        vehicle = add_vehicle(db, world.garage_a)
        buyer = add_client(db, world.garage_a)

        res = client.post("/api/v1/sales", headers=as_(world.manager_a), json={
            "vehicle_id": vehicle.id, "client_id": buyer.id, "sale_price": "14000.00",
        })
        assert res.status_code == 201
        sale = res.json()
        assert sale["garage_id"] == world.garage_a
        assert Decimal(sale["sale_price"]) == Decimal("14000.00")
        assert sale["vehicle"]["make"] == "Peugeot"
        assert sale["employee"]["id"] == sale["employee_id"]

        fetched = client.get(f"/api/v1/vehicles/{vehicle.id}", headers=as_(world.employee_a)).json()
        assert fetched["is_available"] is False

        invoice = client.get(f"/api/v1/sales/{sale['id']}/invoice", headers=as_(world.employee_a))
        assert invoice.status_code == 200
        assert invoice.headers["content-type"].startswith("text/plain")
        assert invoice.text.startswith("INVOICE")

    def test_sale_for_other_garage_is_403(self, client, db, world):
        vehicle = add_vehicle(db, world.garage_a)
        buyer = add_client(db, world.garage_a)
        res = client.post("/api/v1/sales", headers=as_(world.employee_b), json={
            "vehicle_id": vehicle.id, "client_id": buyer.id, "sale_price": "1.00",
            "garage_id": world.garage_a,
        })
        assert res.status_code == 403

    def test_sale_delete_is_403_even_for_admin(self, client, db, world):
        sale = add_sale(db, add_vehicle(db, world.garage_a), add_client(db, world.garage_a), world.employee_a)
        res = client.delete(f"/api/v1/sales/{sale.id}", headers=as_(world.admin))
        assert res.status_code == 403

    def test_dashboard(self, client, db, world):
        add_sale(db, add_vehicle(db, world.garage_a), add_client(db, world.garage_a),
                 world.employee_a, price="14500.00")
        body = client.get("/api/v1/stats/dashboard", headers=as_(world.manager_a)).json()
        assert body["total_sales"] == 1
        assert Decimal(body["revenue"]) == Decimal("14500.00")
        assert len(body["recent_sales"]) == 1

        other = client.get("/api/v1/stats/dashboard", headers=as_(world.employee_b)).json()
        assert other["total_sales"] == 0

    def test_employee_sale_keeps_vehicle_available(self, client, db, world):
        vehicle = add_vehicle(db, world.garage_a)
        buyer = add_client(db, world.garage_a)
        res = client.post("/api/v1/sales", headers=as_(world.employee_a), json={
            "vehicle_id": vehicle.id, "client_id": buyer.id, "sale_price": "14000.00",
        })
        assert res.status_code == 201
        fetched = client.get(f"/api/v1/vehicles/{vehicle.id}", headers=as_(world.employee_a)).json()
        assert fetched["is_available"] is True

    def test_other_garage_vehicle_is_null_in_sale(self, client, db, world):
        vehicle_b = add_vehicle(db, world.garage_b, make="Hidden")
        buyer = add_client(db, world.garage_a)
        created = client.post("/api/v1/sales", headers=as_(world.employee_a), json={
            "vehicle_id": vehicle_b.id, "client_id": buyer.id, "sale_price": "500.00",
        }).json()
        assert created["vehicle"] is None

        fetched = client.get(f"/api/v1/sales/{created['id']}", headers=as_(world.employee_a)).json()
        assert fetched["vehicle"] is None
        assert fetched["client"]["last_name"] == "Martin"

        invoice = client.get(f"/api/v1/sales/{created['id']}/invoice", headers=as_(world.employee_a))
        assert "Hidden" not in invoice.text


class TestQueryBounds:
    @pytest.mark.parametrize("limit", [0, -1])
    def test_sales_limit_must_be_positive(self, client, world, limit):
        res = client.get("/api/v1/sales", params={"limit": limit}, headers=as_(world.employee_a))
        assert res.status_code == 422

    @pytest.mark.parametrize("months", [0, -3])
    def test_stats_months_must_be_positive(self, client, world, months):
        res = client.get("/api/v1/stats/sales", params={"months": months}, headers=as_(world.manager_a))
        assert res.status_code == 422

    def test_positive_limit_accepted(self, client, db, world):
        for _ in range(2):
            add_sale(db, add_vehicle(db, world.garage_a), add_client(db, world.garage_a), world.employee_a)
        res = client.get("/api/v1/sales", params={"limit": 1}, headers=as_(world.employee_a))
        assert res.status_code == 200
        assert len(res.json()) == 1
