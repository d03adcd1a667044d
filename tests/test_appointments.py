"""
Tests for the appointment endpoints.
"""
import pytest
from sqlalchemy.orm import Query


@pytest.fixture
def make_appointment(client):
    def _make(**overrides):
        payload = {
            "patientName": "Jane Doe",
            "doctorName": "Dr. House",
            "date": "2025-10-12",
            "time": "09:00",
            "reason": "Checkup",
        }
        payload.update(overrides)
        response = client.post("/api/appointments", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]
    return _make


def test_create_appointment_defaults(client, make_appointment):
    appointment_id = make_appointment()
    data = client.get(f"/api/appointments/{appointment_id}").json()
    assert data["status"] == "scheduled"
    assert data["time"] == "09:00:00"


def test_create_appointment_missing_fields(client):
    response = client.post("/api/appointments", json={"patientName": "Jane Doe"})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Missing required fields: patientName, doctorName, date, time, reason"
    }


def test_create_appointment_bad_time(client, make_appointment):
    response = client.post(
        "/api/appointments",
        json={"patientName": "A", "doctorName": "B", "date": "2025-10-12", "time": "9am", "reason": "C"},
    )
    assert response.status_code == 400
    assert "time" in response.json()["error"]


def test_filter_by_date_ordered_by_time(client, make_appointment):
    late = make_appointment(time="15:30")
    early = make_appointment(time="08:15:00")
    make_appointment(date="2025-10-13", time="07:00")

    response = client.get("/api/appointments", params={"date": "2025-10-12"})
    assert response.status_code == 200
    data = response.json()
    assert [a["id"] for a in data] == [early, late]
    assert {a["date"] for a in data} == {"2025-10-12"}


def test_filter_by_invalid_date(client):
    response = client.get("/api/appointments", params={"date": "12/10/2025"})
    assert response.status_code == 400


def test_filters_combine(client, make_appointment):
    make_appointment(patientName="Alice Brown", status="completed")
    match = make_appointment(patientName="Alice Green")
    make_appointment(patientName="Bob")

    response = client.get("/api/appointments", params={"patientName": "Alice", "status": "scheduled"})
    assert [a["id"] for a in response.json()] == [match]


def test_list_ordered_by_date_then_time(client, make_appointment):
    third = make_appointment(date="2025-10-14", time="08:00")
    first = make_appointment(date="2025-10-12", time="10:00")
    second = make_appointment(date="2025-10-12", time="11:00")
    assert [a["id"] for a in client.get("/api/appointments").json()] == [first, second, third]


def test_update_appointment(client, make_appointment):
    appointment_id = make_appointment()
    response = client.put(f"/api/appointments/{appointment_id}", json={"status": "completed", "time": "10:45"})
    assert response.status_code == 200
    assert response.json() == {"message": "Appointment updated"}

    data = client.get(f"/api/appointments/{appointment_id}").json()
    assert data["status"] == "completed"
    assert data["time"] == "10:45:00"
    assert data["reason"] == "Checkup"


def test_update_appointment_nothing_to_change(client, make_appointment):
    appointment_id = make_appointment()
    response = client.put(f"/api/appointments/{appointment_id}", json={})
    assert response.status_code == 400

    response = client.put(f"/api/appointments/{appointment_id}", json={"status": "scheduled"})
    assert response.status_code == 400
    assert response.json() == {"error": "No changes to apply"}


def test_update_unknown_appointment(client):
    response = client.put("/api/appointments/9999", json={"status": "completed"})
    assert response.status_code == 404


def test_delete_appointment(client, make_appointment):
    appointment_id = make_appointment()
    assert client.delete(f"/api/appointments/{appointment_id}").json() == {"message": "Appointment deleted"}
    assert client.delete(f"/api/appointments/{appointment_id}").status_code == 404


def test_update_matching_no_rows_is_rejected(client, make_appointment, monkeypatch):
    appointment_id = make_appointment()
    monkeypatch.setattr(Query, "update", lambda self, *args, **kwargs: 0)

    response = client.put(f"/api/appointments/{appointment_id}", json={"status": "completed"})
    assert response.status_code == 400
    assert response.json() == {"error": "No changes applied to appointment"}
    assert client.get(f"/api/appointments/{appointment_id}").json()["status"] == "scheduled"
