"""
Appointment Schemas - Pydantic models for appointment requests and responses.
"""
from typing import Optional
from pydantic import BaseModel
import datetime as dt

class AppointmentCreate(BaseModel):
    """
    Appointment Creation Schema

    Fields:
    - patientName, doctorName, reason: Required text
    - date: Required, YYYY-MM-DD
    - time: Required, HH:MM or HH:MM:SS
    - status: Optional, defaults to "scheduled"
    """
    patientName: Optional[str] = None
    doctorName: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None

class AppointmentUpdate(BaseModel):
    """
    Appointment Update Schema - Any subset of status, reason, date and time
    """
    status: Optional[str] = None
    reason: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None

class AppointmentResponse(BaseModel):
    id: int
    patientName: str
    doctorName: str
    date: dt.date
    time: dt.time
    reason: str
    status: str
    createdAt: Optional[dt.datetime] = None
    updatedAt: Optional[dt.datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
