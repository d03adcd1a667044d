"""
Telemedicine Router - API endpoints for remote consultations.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import (
    TeleAppointmentCreate,
    TeleAppointmentResponse,
    TelePrescriptionCreate,
    MessageCreate,
    MessageResponse
)
from .service import (
    list_appointments,
    schedule_appointment,
    cancel_appointment,
    send_prescription,
    emr_summary,
    post_message,
    list_messages
)

router = APIRouter()

@router.get("/appointments/{patient_id}", response_model=List[TeleAppointmentResponse])
async def list_appointments_route(patient_id: int, db: Session = Depends(get_db)):
    return list_appointments(db, patient_id)

@router.post("/appointments/{patient_id}", status_code=status.HTTP_201_CREATED)
async def schedule_appointment_route(patient_id: int, payload: TeleAppointmentCreate, db: Session = Depends(get_db)):
    appointment = schedule_appointment(db, patient_id, payload.model_dump())
    return {"id": appointment.id, "message": "Appointment scheduled"}

@router.delete("/appointments/{appointment_id}")
async def cancel_appointment_route(appointment_id: int, db: Session = Depends(get_db)):
    cancel_appointment(db, appointment_id)
    return {"message": "Appointment cancelled"}

@router.post("/prescriptions/{patient_id}", status_code=status.HTTP_201_CREATED)
async def send_prescription_route(patient_id: int, payload: TelePrescriptionCreate, db: Session = Depends(get_db)):
    prescription = send_prescription(db, patient_id, payload.model_dump())
    return {"id": prescription.id, "message": "Prescription sent"}

@router.get("/patients/{patient_id}/emr")
async def emr_summary_route(patient_id: int, db: Session = Depends(get_db)):
    """
    Get the compact EMR shown during a consultation.
    """
    return emr_summary(db, patient_id)

@router.post("/messages/{patient_id}", status_code=status.HTTP_201_CREATED)
async def post_message_route(patient_id: int, payload: MessageCreate, db: Session = Depends(get_db)):
    message = post_message(db, patient_id, payload.model_dump())
    return {"id": message.id}

@router.get("/messages/{patient_id}", response_model=List[MessageResponse])
async def list_messages_route(patient_id: int, db: Session = Depends(get_db)):
    return list_messages(db, patient_id)
