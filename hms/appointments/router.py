"""
Appointment Router - API endpoints for the appointment calendar.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import AppointmentCreate, AppointmentUpdate, AppointmentResponse
from .service import (
    list_appointments,
    get_appointment,
    create_appointment,
    update_appointment,
    delete_appointment
)

router = APIRouter()

@router.get("", response_model=List[AppointmentResponse])
async def list_appointments_route(
    patientName: Optional[str] = Query(None, description="Substring of the patient name"),
    date: Optional[str] = Query(None, description="Day, YYYY-MM-DD"),
    status: Optional[str] = Query(None, description="Exact status"),
    db: Session = Depends(get_db)
):
    """
    Get appointments ordered by date and time, optionally filtered.
    """
    return list_appointments(db, patient_name=patientName, on_date=date, status=status)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment_route(appointment_id: int, db: Session = Depends(get_db)):
    return get_appointment(db, appointment_id)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_appointment_route(payload: AppointmentCreate, db: Session = Depends(get_db)):
    """
    Create an appointment.
    """
    appointment = create_appointment(db, payload.model_dump())
    return {"id": appointment.id, "message": "Appointment created successfully"}

@router.put("/{appointment_id}")
async def update_appointment_route(appointment_id: int, payload: AppointmentUpdate, db: Session = Depends(get_db)):
    """
    Update status, reason, date and/or time of an appointment.
    """
    update_appointment(db, appointment_id, payload.model_dump(exclude_unset=True))
    return {"message": "Appointment updated"}

@router.delete("/{appointment_id}")
async def delete_appointment_route(appointment_id: int, db: Session = Depends(get_db)):
    delete_appointment(db, appointment_id)
    return {"message": "Appointment deleted"}
