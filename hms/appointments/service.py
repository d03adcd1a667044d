"""
Appointment Service - Business logic for appointment scheduling.
"""
from typing import Any, List, Mapping, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..core import validators
from ..core.partial_update import UpdatableField, resolve_update
from ..database import row_to_dict
from ..exceptions import NotFoundError, NoOpError, StoreError
from .models import Appointment, DEFAULT_STATUS

# Set up logging
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("patientName", "doctorName", "date", "time", "reason")

APPOINTMENT_UPDATE_FIELDS = (
    UpdatableField("status", validator=validators.non_empty_text),
    UpdatableField("reason", validator=validators.text),
    UpdatableField("date", validator=validators.iso_date),
    UpdatableField("time", validator=validators.clock_time),
)

def list_appointments(
    db: Session,
    patient_name: Optional[str] = None,
    on_date: Optional[str] = None,
    status: Optional[str] = None
) -> List[Appointment]:
    """
    List appointments ordered by date and time, ascending.

    Args:
        db: Database session
        patient_name: Substring match on the patient name
        on_date: Exact match on the date part (YYYY-MM-DD)
        status: Exact match on status

    Returns:
        Matching appointments; all filters are combined with AND
    """
    query = db.query(Appointment)
    if patient_name:
        query = query.filter(Appointment.patientName.like(f"%{patient_name}%"))
    if on_date:
        query = query.filter(Appointment.date == validators.check("date", validators.iso_date, on_date))
    if status:
        query = query.filter(Appointment.status == status)
    return query.order_by(Appointment.date.asc(), Appointment.time.asc()).all()

def get_appointment(db: Session, appointment_id: int) -> Appointment:
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment

def create_appointment(db: Session, data: Mapping[str, Any]) -> Appointment:
    """
    Schedule an appointment.

    The time is stored with seconds; status defaults to "scheduled".

    Raises:
        ValidationError: A required field is missing, or date/time is malformed
    """
    validators.check_required(
        data, REQUIRED_FIELDS,
        f"Missing required fields: {', '.join(REQUIRED_FIELDS)}"
    )
    appointment = Appointment(
        patientName=data["patientName"],
        doctorName=data["doctorName"],
        date=validators.check("date", validators.iso_date, data["date"]),
        time=validators.check("time", validators.clock_time, data["time"]),
        reason=data["reason"],
        status=data.get("status") or DEFAULT_STATUS,
    )
    db.add(appointment)
    try:
        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error inserting appointment: {str(e)}")
        raise StoreError("Failed to create appointment")
    logger.info(f"Appointment {appointment.id} created for {appointment.patientName} on {appointment.date} {appointment.time}")
    return appointment

def update_appointment(db: Session, appointment_id: int, body: Mapping[str, Any]) -> None:
    """
    Update any of status, reason, date and time.

    Raises:
        NotFoundError: If the appointment does not exist
        ValidationError: If date or time is malformed
        NoOpError: If no field would change
    """
    appointment = get_appointment(db, appointment_id)
    clause = resolve_update(row_to_dict(appointment), body, APPOINTMENT_UPDATE_FIELDS)

    try:
        affected = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .update({**clause, "updatedAt": func.now()}, synchronize_session=False)
        )
        if affected == 0:
            db.rollback()
            raise NoOpError("No changes applied to appointment")
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
        raise StoreError("Failed to update appointment")
    logger.info(f"Appointment {appointment_id} updated: {sorted(clause)}")

def delete_appointment(db: Session, appointment_id: int) -> None:
    try:
        affected = db.query(Appointment).filter(Appointment.id == appointment_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise StoreError("Failed to delete appointment")
    if affected == 0:
        raise NotFoundError("Appointment not found")
    logger.info(f"Appointment {appointment_id} deleted")
