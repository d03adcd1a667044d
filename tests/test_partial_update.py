"""
Tests for partial-update resolution.
"""
from datetime import date, time

import pytest

from hms.core import validators
from hms.core.partial_update import TOGGLE, UpdatableField, collect_fields, resolve_update, toggled
from hms.exceptions import NoOpError, ValidationError
from hms.patients.service import PATIENT_UPDATE_FIELDS
from hms.appointments.service import APPOINTMENT_UPDATE_FIELDS
from hms.lab.service import LAB_UPDATE_FIELDS

CURRENT_PATIENT = {
    "id": 1,
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "5551234567",
    "dob": date(1990, 5, 20),
    "address": None,
    "notes": None,
    "status": "Not Attended",
}


def test_only_whitelisted_present_fields_are_kept():
    clause = resolve_update(
        CURRENT_PATIENT,
        {"name": "Janet Doe", "id": 99, "created_at": "2020-01-01", "password": "x"},
        PATIENT_UPDATE_FIELDS,
    )
    assert clause == {"name": "Janet Doe"}


def test_values_are_normalized_by_their_validator():
    clause = resolve_update(CURRENT_PATIENT, {"dob": "1991-01-02"}, PATIENT_UPDATE_FIELDS)
    assert clause == {"dob": date(1991, 1, 2)}


def test_toggle_flips_status():
    clause = resolve_update(CURRENT_PATIENT, {"status": TOGGLE}, PATIENT_UPDATE_FIELDS)
    assert clause == {"status": "Attended"}


def test_toggling_twice_restores_status():
    first = resolve_update(CURRENT_PATIENT, {"status": TOGGLE}, PATIENT_UPDATE_FIELDS)
    after_first = {**CURRENT_PATIENT, **first}
    second = resolve_update(after_first, {"status": TOGGLE}, PATIENT_UPDATE_FIELDS)
    assert second == {"status": CURRENT_PATIENT["status"]}


def test_toggle_from_unknown_status_yields_first_choice():
    assert toggled(None, ("Attended", "Not Attended")) == "Attended"
    assert toggled("weird", ("Attended", "Not Attended")) == "Attended"


def test_explicit_status_must_be_known():
    with pytest.raises(ValidationError) as exc_info:
        resolve_update(CURRENT_PATIENT, {"status": "Discharged"}, PATIENT_UPDATE_FIELDS)
    assert exc_info.value.field == "status"
    assert exc_info.value.detail == "Invalid status value"


def test_invalid_field_names_the_field():
    with pytest.raises(ValidationError) as exc_info:
        resolve_update(CURRENT_PATIENT, {"phone": "12345"}, PATIENT_UPDATE_FIELDS)
    assert exc_info.value.field == "phone"
    assert "10 digits" in exc_info.value.detail


def test_one_invalid_field_rejects_the_whole_update():
    with pytest.raises(ValidationError) as exc_info:
        resolve_update(
            CURRENT_PATIENT,
            {"name": "Janet Doe", "email": "not-an-email"},
            PATIENT_UPDATE_FIELDS,
        )
    assert exc_info.value.field == "email"


def test_empty_body_is_a_no_op():
    with pytest.raises(NoOpError) as exc_info:
        resolve_update(CURRENT_PATIENT, {}, PATIENT_UPDATE_FIELDS)
    assert exc_info.value.detail == "At least one field must be provided to update"


def test_unchanged_values_are_a_no_op():
    with pytest.raises(NoOpError) as exc_info:
        resolve_update(CURRENT_PATIENT, {"name": "Jane Doe"}, PATIENT_UPDATE_FIELDS)
    assert exc_info.value.detail == "No changes to apply"


def test_null_on_required_field_counts_as_absent():
    collected = collect_fields({"name": None}, PATIENT_UPDATE_FIELDS)
    assert not collected["name"].present
    with pytest.raises(NoOpError):
        resolve_update(CURRENT_PATIENT, {"name": None}, PATIENT_UPDATE_FIELDS)


def test_null_clears_nullable_field():
    current = {**CURRENT_PATIENT, "address": "1 Main St"}
    clause = resolve_update(current, {"address": None}, PATIENT_UPDATE_FIELDS)
    assert clause == {"address": None}


def test_camel_case_keys_map_to_columns():
    current = {"test_type": "CBC", "test_date": date(2025, 1, 1), "result": None, "technician_name": None}
    clause = resolve_update(
        current,
        {"testType": "MRI", "technicianName": "Sam"},
        LAB_UPDATE_FIELDS,
    )
    assert clause == {"test_type": "MRI", "technician_name": "Sam"}


def test_appointment_time_gains_seconds():
    current = {"status": "scheduled", "reason": "Checkup", "date": date(2025, 10, 12), "time": time(9, 0)}
    clause = resolve_update(current, {"time": "10:30"}, APPOINTMENT_UPDATE_FIELDS)
    assert clause == {"time": time(10, 30, 0)}


def test_toggle_is_only_recognized_on_toggle_fields():
    fields = (UpdatableField("status", validator=validators.non_empty_text),)
    clause = resolve_update({"status": "scheduled"}, {"status": TOGGLE}, fields)
    assert clause == {"status": TOGGLE}
