"""
Telemedicine Schemas - Pydantic models for remote consultation requests and responses.
"""
from typing import Optional
from pydantic import BaseModel
from datetime import datetime

class TeleAppointmentCreate(BaseModel):
    """
    Fields:
    - specialty: Required
    - date_time: Required, ISO 8601 (YYYY-MM-DDTHH:MM[:SS])
    - notes: Optional
    - status: Optional, defaults to "scheduled"
    """
    specialty: Optional[str] = None
    date_time: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None

class TeleAppointmentResponse(BaseModel):
    id: int
    specialty: str
    date_time: datetime
    status: str
    notes: Optional[str] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class TelePrescriptionCreate(BaseModel):
    medication: Optional[str] = None
    dosage: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    status: Optional[str] = None

class MessageCreate(BaseModel):
    text: Optional[str] = None
    sender: Optional[str] = None

class MessageResponse(BaseModel):
    id: int
    text: str
    sender: str
    timestamp: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
