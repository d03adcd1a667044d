"""
Patient Service - Business logic for patient records.

This module provides service functions for patient CRUD operations and the
partial-update rules used by PATCH /api/patients/{id}.
"""
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_, func
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..core import validators
from ..core.partial_update import UpdatableField, resolve_update
from ..database import row_to_dict
from ..exceptions import NotFoundError, NoOpError, StoreError
from .models import Patient, PatientStatus

# Set up logging
logger = logging.getLogger(__name__)

STATUS_VALUES = (PatientStatus.NOT_ATTENDED.value, PatientStatus.ATTENDED.value)

PATIENT_UPDATE_FIELDS = (
    UpdatableField("name", validator=validators.non_empty_text),
    UpdatableField("email", validator=validators.email),
    UpdatableField("phone", validator=validators.phone),
    UpdatableField("dob", validator=validators.iso_date),
    UpdatableField("address", validator=validators.text, nullable=True),
    UpdatableField("notes", validator=validators.text, nullable=True),
    UpdatableField(
        "status",
        validator=validators.one_of(STATUS_VALUES),
        toggle=(PatientStatus.ATTENDED.value, PatientStatus.NOT_ATTENDED.value),
    ),
)

def get_patient(db: Session, patient_id: int) -> Patient:
    """
    Get a patient by ID.

    Raises:
        NotFoundError: If the patient does not exist
    """
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise NotFoundError("Patient not found")
    return patient

def list_patients(db: Session, search: Optional[str] = None) -> List[Patient]:
    """
    List patients, newest first.

    Args:
        db: Database session
        search: Substring matched against name or email

    Returns:
        List of patients ordered by creation time, then id, descending
    """
    query = db.query(Patient)
    search = (search or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Patient.name.like(pattern), Patient.email.like(pattern)))
    return query.order_by(Patient.created_at.desc(), Patient.id.desc()).all()

def create_patient(db: Session, data: Mapping[str, Any]) -> Patient:
    """
    Register a new patient with status "Not Attended".

    Raises:
        ValidationError: A required field is missing or malformed
    """
    validators.check_required(data, ("name", "email", "phone", "dob"), "Missing required fields")
    patient = Patient(
        name=validators.check("name", validators.non_empty_text, data["name"]),
        email=validators.check("email", validators.email, data["email"]),
        phone=validators.check("phone", validators.phone, data["phone"]),
        dob=validators.check("dob", validators.iso_date, data["dob"]),
        address=data.get("address") or None,
        notes=data.get("notes") or None,
        status=PatientStatus.NOT_ATTENDED.value,
    )
    db.add(patient)
    try:
        db.commit()
        db.refresh(patient)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error inserting patient: {str(e)}")
        raise StoreError("Database error adding patient")
    logger.info(f"Patient {patient.id} created")
    return patient

def update_patient(db: Session, patient_id: int, body: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply a partial update to a patient.

    Args:
        db: Database session
        patient_id: ID of the patient
        body: Any subset of the mutable fields; ``status`` may be "toggle"

    Returns:
        The columns that were written, with their new values

    Raises:
        NotFoundError: If the patient does not exist
        ValidationError: If a supplied field is malformed
        NoOpError: If nothing would change
    """
    patient = get_patient(db, patient_id)
    clause = resolve_update(row_to_dict(patient), body, PATIENT_UPDATE_FIELDS)

    try:
        affected = (
            db.query(Patient)
            .filter(Patient.id == patient_id)
            .update({**clause, "updated_at": func.now()}, synchronize_session=False)
        )
        if affected == 0:
            db.rollback()
            raise NoOpError("No changes applied to patient")
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating patient {patient_id}: {str(e)}")
        raise StoreError("Failed to update patient")

    logger.info(f"Patient {patient_id} updated: {sorted(clause)}")
    return clause

def delete_patient(db: Session, patient_id: int) -> None:
    """
    Delete a patient.

    Raises:
        NotFoundError: If no patient matched
    """
    try:
        affected = db.query(Patient).filter(Patient.id == patient_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting patient {patient_id}: {str(e)}")
        raise StoreError("Database error deleting patient")
    if affected == 0:
        raise NotFoundError("Patient not found")
    logger.info(f"Patient {patient_id} deleted")
