"""
Lab Service - Business logic for lab and imaging records.
"""
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..core import validators
from ..core.partial_update import UpdatableField, resolve_update
from ..database import row_to_dict
from ..exceptions import NotFoundError, NoOpError, StoreError
from ..patients.models import Patient
from ..patients.service import get_patient
from .models import LabRecord

# Set up logging
logger = logging.getLogger(__name__)

LAB_UPDATE_FIELDS = (
    UpdatableField("testType", column="test_type", validator=validators.non_empty_text),
    UpdatableField("testDate", column="test_date", validator=validators.iso_date),
    UpdatableField("result", validator=validators.text, nullable=True),
    UpdatableField("technicianName", column="technician_name", validator=validators.text, nullable=True),
)

def list_lab_records(db: Session, patient_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    List lab records with the patient's name and dob, newest test first.

    Args:
        db: Database session
        patient_id: Restrict to one patient when given

    Returns:
        List of row dictionaries
    """
    query = db.query(
        LabRecord.id,
        LabRecord.test_type,
        LabRecord.test_date,
        LabRecord.result,
        LabRecord.technician_name,
        Patient.name.label("patient_name"),
        Patient.dob.label("patient_dob"),
    ).join(Patient, LabRecord.patient_id == Patient.id)
    if patient_id is not None:
        query = query.filter(LabRecord.patient_id == patient_id)
    try:
        rows = query.order_by(LabRecord.test_date.desc(), LabRecord.id.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching lab records: {str(e)}")
        raise StoreError("Failed to fetch lab records")
    return [dict(row._mapping) for row in rows]

def get_lab_record(db: Session, record_id: int) -> LabRecord:
    record = db.query(LabRecord).filter(LabRecord.id == record_id).first()
    if not record:
        raise NotFoundError("Lab record not found")
    return record

def create_lab_record(db: Session, patient_id: int, data: Mapping[str, Any]) -> LabRecord:
    """
    Add a lab record for an existing patient.

    Raises:
        NotFoundError: If the patient does not exist
        ValidationError: If testType or testDate is missing or malformed
    """
    get_patient(db, patient_id)
    validators.check_required(data, ("testType", "testDate"))
    record = LabRecord(
        patient_id=patient_id,
        test_type=data["testType"],
        test_date=validators.check("testDate", validators.iso_date, data["testDate"]),
        result=data.get("result"),
        technician_name=data.get("technicianName"),
    )
    db.add(record)
    try:
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding lab record: {str(e)}")
        raise StoreError("Failed to add lab record")
    logger.info(f"Lab record {record.id} added for patient {patient_id}")
    return record

def update_lab_record(db: Session, record_id: int, body: Mapping[str, Any]) -> None:
    record = get_lab_record(db, record_id)
    clause = resolve_update(row_to_dict(record), body, LAB_UPDATE_FIELDS)
    try:
        affected = (
            db.query(LabRecord)
            .filter(LabRecord.id == record_id)
            .update(clause, synchronize_session=False)
        )
        if affected == 0:
            db.rollback()
            raise NoOpError("No changes applied to lab record")
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating lab record {record_id}: {str(e)}")
        raise StoreError("Failed to update lab record")
    logger.info(f"Lab record {record_id} updated: {sorted(clause)}")

def delete_lab_record(db: Session, record_id: int) -> None:
    try:
        affected = db.query(LabRecord).filter(LabRecord.id == record_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting lab record {record_id}: {str(e)}")
        raise StoreError("Failed to delete lab record")
    if affected == 0:
        raise NotFoundError("Lab record not found")
