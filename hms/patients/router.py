"""
Patient Router - API endpoints for patient records.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import PatientCreate, PatientUpdate, PatientResponse, PatientRecord
from .service import list_patients, get_patient, create_patient, update_patient, delete_patient

router = APIRouter()

@router.get("", response_model=List[PatientRecord])
async def list_patients_route(
    search: Optional[str] = Query(None, description="Match against name or email"),
    db: Session = Depends(get_db)
):
    """
    Get all patients, newest first, optionally filtered by a search term.
    """
    return list_patients(db, search)

@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient_route(patient_id: int, db: Session = Depends(get_db)):
    """
    Get a single patient by ID.
    """
    return get_patient(db, patient_id)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_patient_route(payload: PatientCreate, db: Session = Depends(get_db)):
    """
    Add a new patient.

    name, email, phone (10 digits) and dob (YYYY-MM-DD) are required.
    """
    patient = create_patient(db, payload.model_dump())
    return {"message": "Patient added successfully", "patientId": patient.id}

@router.patch("/{patient_id}")
async def update_patient_route(patient_id: int, payload: PatientUpdate, db: Session = Depends(get_db)):
    """
    Partially update a patient.

    Only the fields present in the body are considered. Sending
    ``{"status": "toggle"}`` flips between "Attended" and "Not Attended".
    """
    updated = update_patient(db, patient_id, payload.model_dump(exclude_unset=True))
    return {"message": "Patient updated successfully", "updatedFields": updated}

@router.delete("/{patient_id}")
async def delete_patient_route(patient_id: int, db: Session = Depends(get_db)):
    """
    Delete a patient.
    """
    delete_patient(db, patient_id)
    return {"message": "Patient deleted successfully"}
