"""
Lab Router - API endpoints for lab and imaging records.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import LabRecordCreate, LabRecordUpdate, LabRecordResponse
from .service import list_lab_records, create_lab_record, update_lab_record, delete_lab_record

router = APIRouter()

@router.get("", response_model=List[LabRecordResponse])
async def list_lab_records_route(db: Session = Depends(get_db)):
    """
    Get all lab/imaging records with patient info, newest first.
    """
    return list_lab_records(db)

@router.get("/{patient_id}", response_model=List[LabRecordResponse])
async def list_patient_lab_records_route(patient_id: int, db: Session = Depends(get_db)):
    """
    Get lab/imaging records for one patient, newest first.
    """
    return list_lab_records(db, patient_id)

@router.post("/{patient_id}", status_code=status.HTTP_201_CREATED)
async def create_lab_record_route(patient_id: int, payload: LabRecordCreate, db: Session = Depends(get_db)):
    record = create_lab_record(db, patient_id, payload.model_dump())
    return {"id": record.id, "message": "Lab record added"}

@router.put("/{record_id}")
async def update_lab_record_route(record_id: int, payload: LabRecordUpdate, db: Session = Depends(get_db)):
    update_lab_record(db, record_id, payload.model_dump(exclude_unset=True))
    return {"message": "Lab record updated successfully"}

@router.delete("/{record_id}")
async def delete_lab_record_route(record_id: int, db: Session = Depends(get_db)):
    delete_lab_record(db, record_id)
    return {"message": "Lab record deleted successfully"}
