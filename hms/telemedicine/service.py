"""
Telemedicine Service - Remote consultations, prescriptions and chat.
"""
from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..core import validators
from ..exceptions import NotFoundError, StoreError
from ..emr.models import EmrNote
from ..emr.service import calculate_age
from ..lab.models import LabRecord
from ..patients.service import get_patient
from .models import TelemedicineAppointment, TelemedicinePrescription, TelemedicineMessage

# Set up logging
logger = logging.getLogger(__name__)

def _save(db: Session, record, label: str):
    db.add(record)
    try:
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving telemedicine {label}: {str(e)}")
        raise StoreError(f"Failed to save {label}")
    logger.info(f"Telemedicine {label} {record.id} saved for patient {record.patient_id}")
    return record

def list_appointments(db: Session, patient_id: int) -> List[TelemedicineAppointment]:
    """Upcoming and past consultations for a patient, earliest first."""
    return (
        db.query(TelemedicineAppointment)
        .filter(TelemedicineAppointment.patient_id == patient_id)
        .order_by(TelemedicineAppointment.date_time.asc())
        .all()
    )

def schedule_appointment(db: Session, patient_id: int, data: Mapping[str, Any]) -> TelemedicineAppointment:
    get_patient(db, patient_id)
    validators.check_required(data, ("specialty", "date_time"))
    appointment = TelemedicineAppointment(
        patient_id=patient_id,
        specialty=data["specialty"],
        date_time=validators.check("date_time", validators.iso_datetime, data["date_time"]),
        notes=data.get("notes"),
        status=data.get("status") or "scheduled",
    )
    return _save(db, appointment, "appointment")

def cancel_appointment(db: Session, appointment_id: int) -> None:
    try:
        affected = (
            db.query(TelemedicineAppointment)
            .filter(TelemedicineAppointment.id == appointment_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error cancelling telemedicine appointment {appointment_id}: {str(e)}")
        raise StoreError("Failed to cancel")
    if affected == 0:
        raise NotFoundError("Appointment not found")
    logger.info(f"Telemedicine appointment {appointment_id} cancelled")

def send_prescription(db: Session, patient_id: int, data: Mapping[str, Any]) -> TelemedicinePrescription:
    get_patient(db, patient_id)
    validators.check_required(data, ("medication",))
    prescription = TelemedicinePrescription(
        patient_id=patient_id,
        medication=data["medication"],
        dosage=data.get("dosage"),
        duration=data.get("duration"),
        instructions=data.get("instructions"),
        status=data.get("status") or "sent",
    )
    return _save(db, prescription, "prescription")

def emr_summary(db: Session, patient_id: int) -> Dict[str, Any]:
    """
    Compact record shown beside the video call.

    Returns:
        Dict with name, age, the most recent note as history and a lab summary
    """
    patient = get_patient(db, patient_id)
    latest_note = (
        db.query(EmrNote)
        .filter(EmrNote.patient_id == patient_id)
        .order_by(EmrNote.visit_date.desc(), EmrNote.id.desc())
        .first()
    )
    labs = (
        db.query(LabRecord)
        .filter(LabRecord.patient_id == patient_id)
        .order_by(LabRecord.test_date.desc(), LabRecord.id.desc())
        .limit(3)
        .all()
    )
    if labs:
        lab_summary = "Recent labs: " + "; ".join(f"{lab.test_type}: {lab.result or 'pending'}" for lab in labs)
    else:
        lab_summary = "Recent labs: none on file"
    return {
        "name": patient.name,
        "age": calculate_age(patient.dob),
        "history": latest_note.notes if latest_note else "No medical history recorded",
        "labs": lab_summary,
    }

def post_message(db: Session, patient_id: int, data: Mapping[str, Any]) -> TelemedicineMessage:
    get_patient(db, patient_id)
    validators.check_required(data, ("text", "sender"))
    message = TelemedicineMessage(patient_id=patient_id, text=data["text"], sender=data["sender"])
    return _save(db, message, "message")

def list_messages(db: Session, patient_id: int) -> List[TelemedicineMessage]:
    """Chat history for a patient, oldest first."""
    return (
        db.query(TelemedicineMessage)
        .filter(TelemedicineMessage.patient_id == patient_id)
        .order_by(TelemedicineMessage.timestamp.asc(), TelemedicineMessage.id.asc())
        .all()
    )
