"""
EMR Router - Electronic medical record endpoints.
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from .schemas import NoteCreate, DiagnosisCreate, PrescriptionCreate, AllergyCreate
from .service import assemble_emr, add_note, add_diagnosis, add_prescription, add_allergy

router = APIRouter()

@router.get("/{patient_id}")
async def get_emr_route(
    patient_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """
    Get the full EMR for a patient.

    Every collection key is always present; a collection whose table is
    unavailable is returned empty.
    """
    return assemble_emr(db, patient_id, placeholder_alert=settings.emr_placeholder_alert)

@router.post("/{patient_id}/notes", status_code=status.HTTP_201_CREATED)
async def add_note_route(patient_id: int, payload: NoteCreate, db: Session = Depends(get_db)):
    note = add_note(db, patient_id, payload.model_dump())
    return {"id": note.id, "message": "Note added"}

@router.post("/{patient_id}/diagnoses", status_code=status.HTTP_201_CREATED)
async def add_diagnosis_route(patient_id: int, payload: DiagnosisCreate, db: Session = Depends(get_db)):
    diagnosis = add_diagnosis(db, patient_id, payload.model_dump())
    return {"id": diagnosis.id, "message": "Diagnosis added"}

@router.post("/{patient_id}/prescriptions", status_code=status.HTTP_201_CREATED)
async def add_prescription_route(patient_id: int, payload: PrescriptionCreate, db: Session = Depends(get_db)):
    prescription = add_prescription(db, patient_id, payload.model_dump())
    return {"id": prescription.id, "message": "Prescription added"}

@router.post("/{patient_id}/allergies", status_code=status.HTTP_201_CREATED)
async def add_allergy_route(patient_id: int, payload: AllergyCreate, db: Session = Depends(get_db)):
    allergy = add_allergy(db, patient_id, payload.model_dump())
    return {"id": allergy.id, "message": "Allergy added"}
