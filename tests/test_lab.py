"""
Tests for the lab and imaging endpoints.
"""
from sqlalchemy.orm import Query


def _add(client, patient_id, **overrides):
    payload = {"testType": "CBC", "testDate": "2025-09-01", "result": "normal", "technicianName": "Sam"}
    payload.update(overrides)
    response = client.post(f"/api/lab/{patient_id}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def test_add_and_list_lab_records(client, make_patient):
    patient_id = make_patient()
    older = _add(client, patient_id, testDate="2025-01-01")
    newer = _add(client, patient_id, testType="MRI", testDate="2025-06-01")

    response = client.get(f"/api/lab/{patient_id}")
    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data] == [newer, older]
    assert data[0]["patient_name"] == "Jane Doe"
    assert data[0]["patient_dob"] == "1990-05-20"


def test_list_all_lab_records(client, make_patient):
    jane = make_patient()
    john = make_patient(name="John", email="john@example.com")
    _add(client, jane)
    _add(client, john)
    assert len(client.get("/api/lab").json()) == 2
    assert len(client.get(f"/api/lab/{john}").json()) == 1


def test_add_lab_record_unknown_patient(client):
    response = client.post("/api/lab/9999", json={"testType": "CBC", "testDate": "2025-09-01"})
    assert response.status_code == 404


def test_add_lab_record_requires_type_and_date(client, make_patient):
    patient_id = make_patient()
    response = client.post(f"/api/lab/{patient_id}", json={"result": "normal"})
    assert response.status_code == 400


def test_update_lab_record(client, make_patient):
    patient_id = make_patient()
    record_id = _add(client, patient_id)
    response = client.put(f"/api/lab/{record_id}", json={"result": "Abnormal", "testDate": "2025-09-02"})
    assert response.status_code == 200

    record = client.get(f"/api/lab/{patient_id}").json()[0]
    assert record["result"] == "Abnormal"
    assert record["test_date"] == "2025-09-02"
    assert record["test_type"] == "CBC"


def test_update_lab_record_bad_date(client, make_patient):
    record_id = _add(client, make_patient())
    response = client.put(f"/api/lab/{record_id}", json={"testDate": "tomorrow"})
    assert response.status_code == 400
    assert "date" in response.json()["error"]


def test_update_lab_record_empty_body(client, make_patient):
    record_id = _add(client, make_patient())
    assert client.put(f"/api/lab/{record_id}", json={}).status_code == 400


def test_delete_lab_record(client, make_patient):
    patient_id = make_patient()
    record_id = _add(client, patient_id)
    assert client.delete(f"/api/lab/{record_id}").status_code == 200
    assert client.get(f"/api/lab/{patient_id}").json() == []
    assert client.delete(f"/api/lab/{record_id}").status_code == 404


def test_update_lab_record_matching_no_rows(client, make_patient, monkeypatch):
    patient_id = make_patient()
    record_id = _add(client, patient_id)
    monkeypatch.setattr(Query, "update", lambda self, *args, **kwargs: 0)

    response = client.put(f"/api/lab/{record_id}", json={"result": "Abnormal"})
    assert response.status_code == 400
    assert response.json() == {"error": "No changes applied to lab record"}
    assert client.get(f"/api/lab/{patient_id}").json()[0]["result"] == "normal"
