"""
Metrics Router - Dashboard counters.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .service import count_patients, count_appointments_on, pending_billing, bed_occupancy

router = APIRouter(tags=["Metrics"])

@router.get("/patients")
async def patients_metric(db: Session = Depends(get_db)):
    return {"total": count_patients(db)}

@router.get("/appointments")
async def appointments_metric(db: Session = Depends(get_db)):
    """Appointments scheduled for today."""
    return {"today": count_appointments_on(db)}

@router.get("/billing")
async def billing_metric(db: Session = Depends(get_db)):
    return {"pending": pending_billing(db)}

@router.get("/beds")
async def beds_metric(db: Session = Depends(get_db)):
    """Bed occupancy as an integer percentage."""
    return {"occupancy": bed_occupancy(db)}
