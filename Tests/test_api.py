import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def client(system):
    return TestClient(create_app(system))


def register(client, plate="ABC123", customer_id=1):
    client.post("/api/vehicles", json={
        "license_plate": plate, "make": "toyota", "model": "corolla", "year": 2019,
    })
    client.post("/api/customers", json={"customer_id": customer_id, "customer_name": "John Doe"})


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_create_vehicle(client, system):
    response = client.post("/api/vehicles", json={
        "vehicle_type": "TRUCK",
        "license_plate": "trk100",
        "make": "volvo",
        "model": "fh",
        "year": 2015,
        "cargo_capacity": 20.5,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["license_plate"] == "TRK100"
    assert body["make"] == "Volvo"
    assert body["status"] == "AVAILABLE"
    assert system.find_vehicle_by_plate("TRK100").cargo_capacity == 20.5


def test_create_vehicle_invalid_plate(client):
    response = client.post("/api/vehicles", json={
        "license_plate": "AAA1000", "make": "kia", "model": "rio", "year": 2018,
    })
    assert response.status_code == 422


def test_create_duplicate_vehicle(client):
    register(client)
    response = client.post("/api/vehicles", json={
        "license_plate": "abc123", "make": "kia", "model": "rio", "year": 2018,
    })
    assert response.status_code == 409


def test_get_and_list_vehicles(client):
    register(client)
    assert client.get("/api/vehicles/abc123").json()["model"] == "Corolla"
    assert client.get("/api/vehicles/ZZZ999").status_code == 404
    assert len(client.get("/api/vehicles/list").json()) == 1
    assert "ABC123" in client.get("/api/vehicles/table").text


def test_customers(client):
    register(client)
    assert client.post("/api/customers", json={"customer_id": 1, "customer_name": "Jane"}).status_code == 409
    assert client.get("/api/customers/1").json()["customer_name"] == "John Doe"
    assert client.get("/api/customers/2").status_code == 404
    assert client.get("/api/customers/abc").status_code == 400
    assert len(client.get("/api/customers/list").json()) == 1
    assert "John Doe" in client.get("/api/customers/table").text


def test_rent_and_return(client):
    register(client)
    payload = {"license_plate": "abc123", "customer_id": 1, "record_date": "2024-05-01", "amount": 150.0}

    response = client.post("/api/rentals/rent", json=payload)
    assert response.status_code == 201
    assert response.json()["kind"] == "RENT"
    assert client.get("/api/vehicles/ABC123").json()["status"] == "RENTED"
    assert client.get("/api/vehicles/list", params={"available_only": True}).json() == []

    assert client.post("/api/rentals/rent", json=payload).status_code == 409

    response = client.post("/api/rentals/return", json={**payload, "amount": 10.0})
    assert response.status_code == 201
    assert response.json()["amount"] == 10.0

    assert client.post("/api/rentals/return", json=payload).status_code == 409

    history = client.get("/api/rentals/history").json()
    assert [r["kind"] for r in history] == ["RENT", "RETURN"]
    assert "RETURN | Plate: ABC123" in client.get("/api/rentals/history/table").text


def test_rent_unknown_vehicle_or_customer(client):
    register(client)
    assert client.post("/api/rentals/rent", json={"license_plate": "ZZZ999", "customer_id": 1}).status_code == 404
    assert client.post("/api/rentals/rent", json={"license_plate": "ABC123", "customer_id": 5}).status_code == 404


def test_change_plate(client):
    register(client)
    register(client, plate="XYZ999", customer_id=2)

    response = client.put("/api/vehicles/abc123/plate", json={"license_plate": "new111"})
    assert response.status_code == 200
    assert response.json()["license_plate"] == "NEW111"
    assert client.get("/api/vehicles/ABC123").status_code == 404

    assert client.put("/api/vehicles/NEW111/plate", json={"license_plate": "xyz999"}).status_code == 409
    assert client.put("/api/vehicles/NEW111/plate", json={"license_plate": "BAD"}).status_code == 422
    assert client.put("/api/vehicles/QQQ000/plate", json={"license_plate": "QQQ001"}).status_code == 404
