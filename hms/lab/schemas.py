"""
Lab Schemas - Request bodies use the frontend's camelCase keys, responses the column names.
"""
from typing import Optional
from pydantic import BaseModel
from datetime import date

class LabRecordCreate(BaseModel):
    """
    Lab Record Creation Schema

    Fields:
    - testType: Required
    - testDate: Required, YYYY-MM-DD
    - result: Optional free text
    - technicianName: Optional
    """
    testType: Optional[str] = None
    testDate: Optional[str] = None
    result: Optional[str] = None
    technicianName: Optional[str] = None

class LabRecordUpdate(LabRecordCreate):
    """Lab Record Update Schema - Any subset of the creation fields"""

class LabRecordResponse(BaseModel):
    """Lab record joined with the patient's name and date of birth"""
    id: int
    test_type: str
    test_date: date
    result: Optional[str] = None
    technician_name: Optional[str] = None
    patient_name: str
    patient_dob: Optional[date] = None
