"""
Patient Schemas - Pydantic models for patient request bodies and responses.

Formats (email, phone, dates) are checked by the service layer so that every
error names the offending field in the same way for create and update.
"""
from typing import Optional
from pydantic import BaseModel, field_validator
from datetime import date, datetime

class PatientCreate(BaseModel):
    """
    Patient Creation Schema

    Fields:
    - name, email, phone, dob: Required
    - address, notes: Optional
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

class PatientUpdate(BaseModel):
    """
    Patient Update Schema - Any subset of the mutable fields

    ``status`` accepts "Not Attended", "Attended" or "toggle".
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None

class PatientResponse(BaseModel):
    """Single patient as returned by GET /api/patients/{id}"""
    id: int
    name: str
    email: str
    phone: str
    dob: date
    address: Optional[str] = None
    notes: Optional[str] = None
    status: str

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or "Not Attended"

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class PatientRecord(PatientResponse):
    """Full patient row as returned by the list endpoint"""
    gender: Optional[str] = None
    insurance: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy: Optional[str] = None
    family_history: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
