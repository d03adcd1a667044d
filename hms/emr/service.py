"""
EMR Service - Assembles a patient's electronic medical record.

The record is built from the patient row plus a set of optional child
collections. Each child collection is fetched independently: if its query
fails (the table may not exist in older deployments), the collection is
reported as empty and the rest of the record is still returned.
"""
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..core import validators
from ..database import Base, row_to_dict
from ..exceptions import NotFoundError, StoreError
from ..lab.models import LabRecord
from ..patients.models import Patient
from ..patients.service import get_patient
from .models import Medication, EmrNote, Diagnosis, Prescription, Allergy

# Set up logging
logger = logging.getLogger(__name__)

NO_ALERTS_MESSAGE = "No alerts"
NOT_AVAILABLE = "N/A"

Fetcher = Callable[[Session, int], List[Dict[str, Any]]]


@dataclass(frozen=True)
class ChildCollection:
    """A named, independently fallible query for one part of the record."""
    key: str
    fetch: Fetcher


def _fetch_rows(model, *order_by) -> Fetcher:
    def fetch(db: Session, patient_id: int) -> List[Dict[str, Any]]:
        rows = db.query(model).filter(model.patient_id == patient_id).order_by(*order_by).all()
        return [row_to_dict(row) for row in rows]
    return fetch


CHILD_COLLECTIONS = (
    ChildCollection("labs", _fetch_rows(LabRecord, LabRecord.test_date.desc(), LabRecord.id.desc())),
    ChildCollection("medications", _fetch_rows(Medication, Medication.id.desc())),
    ChildCollection("notes", _fetch_rows(EmrNote, EmrNote.visit_date.desc(), EmrNote.id.desc())),
    ChildCollection("diagnoses", _fetch_rows(Diagnosis, Diagnosis.id.desc())),
    ChildCollection("prescriptions", _fetch_rows(Prescription, Prescription.id.desc())),
    ChildCollection("allergies", _fetch_rows(Allergy, Allergy.id.desc())),
)


def calculate_age(dob: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole years between ``dob`` and ``today``."""
    if dob is None:
        return None
    today = today or date.today()
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


def derive_alerts(labs: Sequence[Mapping[str, Any]], placeholder: bool = True) -> List[Dict[str, Any]]:
    """
    One alert per lab whose result mentions "abnormal", in any case.

    With ``placeholder`` set, an empty result is replaced by a single
    "No alerts" entry stamped with the current time.
    """
    alerts = [
        {"message": f"Abnormal lab: {lab.get('test_type')}", "timestamp": lab.get("test_date")}
        for lab in labs
        if "abnormal" in (lab.get("result") or "").lower()
    ]
    if not alerts and placeholder:
        alerts.append({"message": NO_ALERTS_MESSAGE, "timestamp": datetime.now(timezone.utc).isoformat()})
    return alerts


def _patient_snapshot(patient: Patient, today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "id": patient.id,
        "name": patient.name,
        "email": patient.email,
        "phone": patient.phone,
        "dob": patient.dob,
        "age": calculate_age(patient.dob, today),
        "gender": patient.gender or NOT_AVAILABLE,
        "address": patient.address,
        "insurance": patient.insurance or NOT_AVAILABLE,
        "insurance_provider": patient.insurance_provider or NOT_AVAILABLE,
        "insurance_policy": patient.insurance_policy or NOT_AVAILABLE,
        "family_history": patient.family_history or patient.notes or "No family history",
        "status": patient.status,
    }


def _fetch_optional(db: Session, collection: ChildCollection, patient_id: int) -> List[Dict[str, Any]]:
    try:
        return collection.fetch(db, patient_id)
    except Exception as e:
        db.rollback()
        logger.warning(f"[EMR] {collection.key} skipped for patient {patient_id}: {str(e)}")
        return []


def assemble_emr(
    db: Session,
    patient_id: int,
    collections: Sequence[ChildCollection] = CHILD_COLLECTIONS,
    placeholder_alert: bool = True,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Build the full EMR for a patient.

    Args:
        db: Database session
        patient_id: ID of the patient
        collections: Child collections to include
        placeholder_alert: Whether an empty alert list becomes a single "No alerts" entry
        today: Reference day for the age calculation

    Returns:
        Dict with the patient snapshot, overview, every collection key and alerts

    Raises:
        NotFoundError: If the patient does not exist; no child query is run
    """
    try:
        patient = db.query(Patient).filter(Patient.id == patient_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[EMR] Patient lookup failed for {patient_id}: {str(e)}")
        raise StoreError("EMR fetch failed")
    if not patient:
        raise NotFoundError("Patient not found")

    snapshot = _patient_snapshot(patient, today)
    logger.info(f"[EMR] Patient loaded: {snapshot['name']} (age: {snapshot['age']})")

    emr: Dict[str, Any] = {
        "patient": snapshot,
        "family_history": snapshot["family_history"],
    }
    for collection in collections:
        emr[collection.key] = _fetch_optional(db, collection, patient_id)

    allergies = emr.get("allergies") or []
    emr["overview"] = {
        "vitals": "No vitals",
        "allergies": ", ".join(a["allergen"] for a in allergies) if allergies else "No allergies",
    }
    emr["alerts"] = derive_alerts(emr.get("labs", []), placeholder=placeholder_alert)
    return emr


def _add_child(db: Session, record: Base, label: str) -> Base:
    db.add(record)
    try:
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[EMR] Error adding {label}: {str(e)}")
        raise StoreError(f"Failed to add {label}")
    logger.info(f"[EMR] {label.capitalize()} {record.id} added for patient {record.patient_id}")
    return record


def _check_note(db: Session, patient_id: int, note_id: Optional[int]) -> Optional[int]:
    if note_id is None:
        return None
    exists = (
        db.query(EmrNote.id)
        .filter(EmrNote.id == note_id, EmrNote.patient_id == patient_id)
        .first()
    )
    if not exists:
        raise NotFoundError("EMR note not found")
    return note_id


def add_note(db: Session, patient_id: int, data: Mapping[str, Any]) -> EmrNote:
    """
    Record a visit note.

    Raises:
        NotFoundError: If the patient does not exist
        ValidationError: If visitDate, notes or doctorId is missing
    """
    get_patient(db, patient_id)
    validators.check_required(data, ("visitDate", "notes", "doctorId"))
    note = EmrNote(
        patient_id=patient_id,
        visit_date=validators.check("visitDate", validators.iso_date, data["visitDate"]),
        notes=data["notes"],
        doctor_id=str(data["doctorId"]),
        doctor_name=data.get("doctorName"),
    )
    return _add_child(db, note, "note")


def add_diagnosis(db: Session, patient_id: int, data: Mapping[str, Any]) -> Diagnosis:
    get_patient(db, patient_id)
    validators.check_required(data, ("description",), "Description is required")
    diagnosis = Diagnosis(
        patient_id=patient_id,
        emr_note_id=_check_note(db, patient_id, data.get("emrNoteId")),
        diagnosis_code=data.get("diagnosisCode"),
        description=data["description"],
        severity=data.get("severity"),
    )
    return _add_child(db, diagnosis, "diagnosis")


def add_prescription(db: Session, patient_id: int, data: Mapping[str, Any]) -> Prescription:
    get_patient(db, patient_id)
    validators.check_required(data, ("medicationName",), "Medication name is required")
    prescription = Prescription(
        patient_id=patient_id,
        emr_note_id=_check_note(db, patient_id, data.get("emrNoteId")),
        medication_name=data["medicationName"],
        dosage=data.get("dosage"),
        duration=data.get("duration"),
        instructions=data.get("instructions") or None,
    )
    return _add_child(db, prescription, "prescription")


def add_allergy(db: Session, patient_id: int, data: Mapping[str, Any]) -> Allergy:
    get_patient(db, patient_id)
    validators.check_required(data, ("allergen",), "Allergen is required")
    allergy = Allergy(
        patient_id=patient_id,
        allergen=data["allergen"],
        reaction=data.get("reaction") or None,
        severity=data.get("severity"),
    )
    return _add_child(db, allergy, "allergy")
