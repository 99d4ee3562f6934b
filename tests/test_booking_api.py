import calendar
from datetime import timedelta

from app.models import Appointment, AppointmentStatus


def test_booking_page(client, tenant, service):
    response = client.get("/api/v1/book/precision-auto")

    assert response.status_code == 200
    data = response.json()
    assert data["business_name"] == "Precision Auto"
    assert data["address"] == "12 Main St, Austin, TX 78701"
    assert data["timezone"] == "America/Chicago"
    assert data["availability_rules"]["slotDurationMinutes"] == 30
    assert len(data["services"]) == 1
    assert data["services"][0]["formatted_price"] == "$49.99"
    assert data["services"][0]["formatted_duration"] == "1h"
    assert data["services"][0]["category"] == "oil_change"


def test_booking_page_slug_is_case_insensitive(client, tenant):
    assert client.get("/api/v1/book/Precision-Auto").status_code == 200


def test_booking_page_unknown_slug(client, tenant):
    assert client.get("/api/v1/book/nobody-here").status_code == 404


def test_booking_page_when_booking_disabled(client, db, tenant):
    tenant.booking_enabled = False
    db.commit()

    response = client.get("/api/v1/book/precision-auto")

    assert response.status_code == 400
    assert response.json()["detail"] == "Booking is not enabled for this business"


def test_inactive_services_are_hidden(client, db, tenant, service):
    service.is_bookable_online = False
    db.commit()

    assert client.get("/api/v1/book/precision-auto").json()["services"] == []


def test_available_slots(client, tenant, service, next_monday):
    response = client.get(
        "/api/v1/book/precision-auto/availability",
        params={"date": next_monday.isoformat(), "service_id": service.id}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["service_name"] == "Oil Change"
    assert data["duration_minutes"] == 60
    assert len(data["available_slots"]) == 17
    assert data["available_slots"][0]["start_time"] == f"{next_monday.isoformat()}T08:00:00"
    assert data["available_slots"][-1]["end_time"] == f"{next_monday.isoformat()}T17:00:00"


def test_available_slots_unknown_service(client, tenant, next_monday):
    response = client.get(
        "/api/v1/book/precision-auto/availability",
        params={"date": next_monday.isoformat(), "service_id": 999}
    )

    assert response.status_code == 400


def test_available_slots_without_rules(client, db, tenant, service, next_monday):
    tenant.availability_rules = None
    db.commit()

    response = client.get(
        "/api/v1/book/precision-auto/availability",
        params={"date": next_monday.isoformat(), "service_id": service.id}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Availability rules not configured"


def test_available_slots_with_corrupt_rules(client, db, tenant, service, next_monday):
    tenant.availability_rules = {"schemaVersion": 99}
    db.commit()

    response = client.get(
        "/api/v1/book/precision-auto/availability",
        params={"date": next_monday.isoformat(), "service_id": service.id}
    )

    assert response.status_code == 400


def test_calendar(client, tenant, service, next_monday):
    response = client.get(
        "/api/v1/book/precision-auto/calendar",
        params={"year": next_monday.year, "month": next_monday.month, "service_id": service.id}
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["days"]) == calendar.monthrange(next_monday.year, next_monday.month)[1]

    monday = data["days"][next_monday.day - 1]
    assert monday["date"] == next_monday.isoformat()
    assert monday["is_open"] is True
    assert monday["available_slots"] == 17

    for day in data["days"]:
        if day["day_of_week"] == "Sunday":
            assert day["is_open"] is False
            assert day["reason"] == "Closed"


def test_calendar_rejects_bad_month(client, tenant):
    response = client.get("/api/v1/book/precision-auto/calendar", params={"year": 2025, "month": 13})

    assert response.status_code == 422


def book(client, service, start_time, **overrides):
    payload = {
        "service_id": service.id,
        "start_time": start_time,
        "customer_name": "Dana Reyes",
        "customer_phone": "(512) 555-0199",
        "customer_email": "dana@example.com",
    }
    payload.update(overrides)
    return client.post("/api/v1/book/precision-auto/appointments", json=payload)


def test_public_booking(client, db, tenant, service, next_monday):
    response = book(client, service, f"{next_monday.isoformat()}T09:00:00")

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["service_name"] == "Oil Change"
    assert data["end_time"] == f"{next_monday.isoformat()}T10:00:00"

    appointment = db.query(Appointment).filter(Appointment.id == data["appointment_id"]).one()
    assert appointment.booking_source == "web"
    assert appointment.status == AppointmentStatus.SCHEDULED
    assert appointment.service_item_id == service.id


def test_public_booking_removes_the_slot(client, tenant, service, next_monday):
    book(client, service, f"{next_monday.isoformat()}T09:00:00")

    slots = client.get(
        "/api/v1/book/precision-auto/availability",
        params={"date": next_monday.isoformat(), "service_id": service.id}
    ).json()["available_slots"]

    slot_starts = [s["start_time"][11:16] for s in slots]
    assert "08:30" not in slot_starts
    assert "09:00" not in slot_starts
    assert "09:30" not in slot_starts
    assert "10:00" in slot_starts


def test_public_booking_conflicts(client, tenant, service, next_monday):
    day = next_monday.isoformat()
    assert book(client, service, f"{day}T09:00:00").status_code == 201

    assert book(client, service, f"{day}T09:00:00").status_code == 409
    assert book(client, service, f"{day}T09:30:00").status_code == 409


def test_public_booking_off_grid_start(client, tenant, service, next_monday):
    response = book(client, service, f"{next_monday.isoformat()}T09:15:00")

    assert response.status_code == 409
    assert response.json()["detail"] == "The selected time is no longer available"


def test_public_booking_on_closed_day(client, tenant, service, next_monday):
    sunday = next_monday - timedelta(days=1)

    assert book(client, service, f"{sunday.isoformat()}T10:00:00").status_code == 409


def test_public_booking_validates_contact_details(client, tenant, service, next_monday):
    response = book(client, service, f"{next_monday.isoformat()}T09:00:00", customer_phone="call me")

    assert response.status_code == 422


def test_public_booking_without_rules(client, db, tenant, service, next_monday):
    tenant.availability_rules = None
    db.commit()

    response = book(client, service, f"{next_monday.isoformat()}T09:00:00")

    assert response.status_code == 400
    assert response.json()["detail"] == "Availability rules not configured"
    assert db.query(Appointment).count() == 0


def test_public_booking_with_unreadable_rules(client, db, tenant, service, next_monday):
    tenant.availability_rules = {"schemaVersion": 7}
    db.commit()

    response = book(client, service, f"{next_monday.isoformat()}T09:00:00")

    assert response.status_code == 400
    assert response.json()["detail"] == "Unsupported availability rules schema version: 7"
