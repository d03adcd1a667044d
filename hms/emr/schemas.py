"""
EMR Schemas - Request bodies for the EMR write endpoints.

Required fields are enforced by the service so that the error names the field.
"""
from typing import Optional, Union
from pydantic import BaseModel

class NoteCreate(BaseModel):
    visitDate: Optional[str] = None
    notes: Optional[str] = None
    doctorId: Optional[Union[int, str]] = None
    doctorName: Optional[str] = None

class DiagnosisCreate(BaseModel):
    emrNoteId: Optional[int] = None
    diagnosisCode: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[str] = None

class PrescriptionCreate(BaseModel):
    emrNoteId: Optional[int] = None
    medicationName: Optional[str] = None
    dosage: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None

class AllergyCreate(BaseModel):
    allergen: Optional[str] = None
    reaction: Optional[str] = None
    severity: Optional[str] = None
