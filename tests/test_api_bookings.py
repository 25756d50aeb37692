# Import testing tools
from datetime import date
import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from rental_service import models


@pytest.fixture
def booking_data():
    return {
        "booking_code": "BK-001",
        "user_name": "Rina",
        "items": ["Tent", "Tent", "Stove"],
        "rent_date": "2024-07-01",
        "return_date": "2024-07-03",
        "payment_method": "transfer",
        "status": "PendingPayment",
    }


@pytest.fixture
def camping_gear(add_equipment):
    add_equipment("Tent", price_per_day=10000, stock=2)
    add_equipment("Stove", price_per_day=2500, stock=1)


def test_read_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200


def test_list_equipment(client: TestClient, camping_gear):
    response = client.get("/api/equipment")

    assert response.status_code == 200
    assert response.json() == [
        {"name": "Stove", "price_per_day": 2500, "stock": 1},
        {"name": "Tent", "price_per_day": 10000, "stock": 2},
    ]


def test_create_booking_success(client: TestClient, camping_gear, booking_data, db_session: Session):
    booking_data["total_price"] = 1  # Ignored by the server
    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 201
    data = response.json()
    assert data["booking_code"] == "BK-001"
    assert data["items"] == ["Tent", "Tent", "Stove"]
    assert data["total_price"] == (10000 * 2 + 2500) * 3
    assert data["status"] == "PendingPayment"

    stored = db_session.query(models.Booking).filter_by(booking_code="BK-001").one()
    assert json.loads(stored.items) == ["Tent", "Tent", "Stove"]


def test_create_booking_duplicate_code(client: TestClient, camping_gear, booking_data):
    booking_data["items"] = ["Stove"]
    booking_data["status"] = "Completed"
    assert client.post("/api/bookings", json=booking_data).status_code == 201

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_create_booking_too_long(client: TestClient, camping_gear, booking_data):
    booking_data["rent_date"] = "2024-01-01"
    booking_data["return_date"] = "2024-01-08"

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 400
    assert "maximum rental period is 7 days" in response.json()["detail"]


def test_create_booking_unknown_item(client: TestClient, camping_gear, booking_data, db_session: Session):
    booking_data["items"] = ["Tent", "Kayak"]

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 404
    assert "Kayak" in response.json()["detail"]
    assert db_session.query(models.Booking).count() == 0


def test_create_booking_invalid_date(client: TestClient, camping_gear, booking_data):
    booking_data["return_date"] = "2024-02-30"
    booking_data["rent_date"] = "2024-02-28"

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 400
    assert "not a valid calendar date" in response.json()["detail"]


def test_create_booking_missing_field(client: TestClient, booking_data):
    del booking_data["user_name"]

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 400
    assert "user_name" in response.json()["detail"]


def test_create_booking_out_of_stock(client: TestClient, camping_gear, booking_data, add_booking):
    add_booking("EXISTING", ["Stove"], date(2024, 7, 3), date(2024, 7, 5))

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 409
    assert "Not enough stock" in response.json()["detail"]
    assert "Stove" in response.json()["detail"]


def test_create_booking_requesting_more_units_than_stock(client: TestClient, camping_gear, booking_data):
    booking_data["items"] = ["Tent", "Tent", "Tent"]

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 409


def test_quote_booking(client: TestClient, camping_gear, booking_data, db_session: Session):
    response = client.post("/api/bookings/quote", json=booking_data)

    assert response.status_code == 200
    assert response.json() == {"total_price": (10000 * 2 + 2500) * 3, "rental_days": 3}
    assert db_session.query(models.Booking).count() == 0


def test_read_bookings_newest_first(client: TestClient, add_booking):
    add_booking("FIRST", ["Tent"], date(2024, 7, 1), date(2024, 7, 2))
    add_booking("SECOND", ["Stove"], date(2024, 7, 1), date(2024, 7, 2))

    response = client.get("/api/bookings")

    assert response.status_code == 200
    assert [b["booking_code"] for b in response.json()] == ["SECOND", "FIRST"]


def test_read_bookings_with_malformed_items(client: TestClient, add_booking):
    add_booking("BROKEN", None, date(2024, 7, 1), date(2024, 7, 2), raw_items="not json")

    response = client.get("/api/bookings/BROKEN")

    assert response.status_code == 200
    assert response.json()["items"] == []


def test_read_booking_by_code(client: TestClient, add_booking):
    add_booking("BK-777", ["Tent", "Tent"], date(2024, 7, 1), date(2024, 7, 2))

    response = client.get("/api/bookings/BK-777")

    assert response.status_code == 200
    data = response.json()
    assert data["items"] == ["Tent", "Tent"]
    assert data["rent_date"] == "2024-07-01"


def test_read_booking_not_found(client: TestClient):
    response = client.get("/api/bookings/NOPE")

    assert response.status_code == 404
    assert response.json() == {"detail": "Booking not found."}


def test_create_booking_requires_status(client: TestClient, camping_gear, booking_data, db_session: Session):
    del booking_data["status"]

    response = client.post("/api/bookings", json=booking_data)

    assert response.status_code == 400
    assert "status" in response.json()["detail"]
    assert db_session.query(models.Booking).count() == 0
