"""
Tests for EMR assembly and the EMR endpoints.
"""
from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from hms.emr.service import (
    CHILD_COLLECTIONS,
    NO_ALERTS_MESSAGE,
    ChildCollection,
    assemble_emr,
    calculate_age,
    derive_alerts,
)
from hms.exceptions import NotFoundError, StoreError
from hms.lab.models import LabRecord
from hms.patients.models import Patient

COLLECTION_KEYS = {c.key for c in CHILD_COLLECTIONS}


@pytest.fixture
def patient(db):
    patient = Patient(
        name="John Smith",
        email="john@example.com",
        phone="5550001111",
        dob=date(1980, 6, 15),
        status="Not Attended",
    )
    db.add(patient)
    db.commit()
    db.refresh(patient)
    return patient


def _failing(key):
    def fetch(db, patient_id):
        raise OperationalError("SELECT 1", {}, Exception(f"no such table: {key}"))
    return ChildCollection(key, fetch)


def test_calculate_age_before_and_after_birthday():
    assert calculate_age(date(1980, 6, 15), today=date(2025, 6, 14)) == 44
    assert calculate_age(date(1980, 6, 15), today=date(2025, 6, 15)) == 45
    assert calculate_age(None) is None


def test_derive_alerts_matches_abnormal_in_any_case():
    labs = [
        {"test_type": "CBC", "test_date": date(2025, 1, 1), "result": "ABNORMAL white count"},
        {"test_type": "Lipids", "test_date": date(2025, 1, 2), "result": "normal"},
        {"test_type": "X-Ray", "test_date": date(2025, 1, 3), "result": None},
    ]
    alerts = derive_alerts(labs)
    assert alerts == [{"message": "Abnormal lab: CBC", "timestamp": date(2025, 1, 1)}]


def test_derive_alerts_placeholder_can_be_disabled():
    assert derive_alerts([], placeholder=False) == []
    placeholder = derive_alerts([])
    assert len(placeholder) == 1
    assert placeholder[0]["message"] == NO_ALERTS_MESSAGE


def test_assemble_contains_every_collection_key(db, patient):
    emr = assemble_emr(db, patient.id, today=date(2025, 6, 15))
    assert COLLECTION_KEYS <= set(emr)
    assert {"patient", "overview", "family_history", "alerts"} <= set(emr)
    assert emr["patient"]["age"] == 45
    assert emr["patient"]["gender"] == "N/A"
    assert emr["family_history"] == "No family history"
    assert emr["overview"]["allergies"] == "No allergies"


def test_failing_collections_are_empty_and_others_survive(db, patient):
    db.add(LabRecord(patient_id=patient.id, test_type="CBC", test_date=date(2025, 3, 1), result="abnormal"))
    db.commit()
    collections = [c for c in CHILD_COLLECTIONS if c.key == "labs"] + [
        _failing("notes"),
        _failing("allergies"),
    ]
    emr = assemble_emr(db, patient.id, collections=collections)
    assert emr["notes"] == []
    assert emr["allergies"] == []
    assert len(emr["labs"]) == 1
    assert emr["alerts"][0]["message"] == "Abnormal lab: CBC"


def test_all_collections_failing_still_returns_the_record(db, patient):
    collections = [_failing(c.key) for c in CHILD_COLLECTIONS]
    emr = assemble_emr(db, patient.id, collections=collections)
    for key in COLLECTION_KEYS:
        assert emr[key] == []
    assert emr["patient"]["name"] == "John Smith"


def test_missing_table_is_reported_empty(db, patient):
    db.execute(text("DROP TABLE emr_allergies"))
    db.commit()
    emr = assemble_emr(db, patient.id)
    assert emr["allergies"] == []
    assert emr["overview"]["allergies"] == "No allergies"


def test_unknown_patient_runs_no_child_query(db):
    calls = []

    def fetch(db, patient_id):
        calls.append(patient_id)
        return []

    with pytest.raises(NotFoundError):
        assemble_emr(db, 424242, collections=[ChildCollection("labs", fetch)])
    assert calls == []


def test_get_emr_endpoint(client, make_patient):
    patient_id = make_patient()
    client.post(f"/api/emr/{patient_id}/allergies", json={"allergen": "Penicillin", "reaction": "Rash"})
    client.post(f"/api/emr/{patient_id}/allergies", json={"allergen": "Peanuts"})

    response = client.get(f"/api/emr/{patient_id}")
    assert response.status_code == 200
    data = response.json()
    assert COLLECTION_KEYS <= set(data)
    assert {a["allergen"] for a in data["allergies"]} == {"Penicillin", "Peanuts"}
    assert "Penicillin" in data["overview"]["allergies"]
    assert data["alerts"][0]["message"] == NO_ALERTS_MESSAGE


def test_get_emr_without_placeholder(client, make_patient):
    client.app.state.settings = client.app.state.settings.model_copy(update={"emr_placeholder_alert": False})
    patient_id = make_patient()
    response = client.get(f"/api/emr/{patient_id}")
    assert response.status_code == 200
    assert response.json()["alerts"] == []


def test_get_emr_unknown_patient(client):
    response = client.get("/api/emr/9999")
    assert response.status_code == 404
    assert response.json() == {"error": "Patient not found"}


def test_add_note_and_linked_diagnosis(client, make_patient):
    patient_id = make_patient()
    response = client.post(
        f"/api/emr/{patient_id}/notes",
        json={"visitDate": "2025-10-01", "notes": "Follow-up visit", "doctorId": 7, "doctorName": "Dr. Who"},
    )
    assert response.status_code == 201
    note_id = response.json()["id"]

    response = client.post(
        f"/api/emr/{patient_id}/diagnoses",
        json={"emrNoteId": note_id, "diagnosisCode": "J10", "description": "Influenza", "severity": "mild"},
    )
    assert response.status_code == 201

    data = client.get(f"/api/emr/{patient_id}").json()
    assert data["notes"][0]["doctor_id"] == "7"
    assert data["diagnoses"][0]["emr_note_id"] == note_id


def test_add_note_requires_fields(client, make_patient):
    patient_id = make_patient()
    response = client.post(f"/api/emr/{patient_id}/notes", json={"notes": "No date"})
    assert response.status_code == 400
    assert "visitDate" in response.json()["error"]


def test_diagnosis_for_unknown_note(client, make_patient):
    patient_id = make_patient()
    response = client.post(
        f"/api/emr/{patient_id}/diagnoses",
        json={"emrNoteId": 555, "description": "Influenza"},
    )
    assert response.status_code == 404


def test_prescription_requires_medication(client, make_patient):
    patient_id = make_patient()
    response = client.post(f"/api/emr/{patient_id}/prescriptions", json={"dosage": "5mg"})
    assert response.status_code == 400
    assert response.json() == {"error": "Medication name is required"}

    response = client.post(
        f"/api/emr/{patient_id}/prescriptions",
        json={"medicationName": "Amoxicillin", "dosage": "500mg", "duration": "7 days"},
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Prescription added"


def test_child_write_for_unknown_patient(client):
    response = client.post("/api/emr/9999/allergies", json={"allergen": "Dust"})
    assert response.status_code == 404


def test_conversion_error_in_collection_is_reported_empty(db, patient):
    def fetch(db, patient_id):
        raise ValueError("bad row conversion")

    collections = list(CHILD_COLLECTIONS) + [ChildCollection("vitals", fetch)]
    emr = assemble_emr(db, patient.id, collections=collections)
    assert emr["vitals"] == []
    assert emr["patient"]["name"] == "John Smith"


def test_patient_lookup_failure_is_a_store_error(db, monkeypatch):
    def broken(self):
        raise OperationalError("SELECT", {}, Exception("server has gone away"))

    monkeypatch.setattr(Query, "first", broken)
    with pytest.raises(StoreError):
        assemble_emr(db, 1)
