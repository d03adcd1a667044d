"""
Metrics Service - Dashboard counters.
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import func
import logging

from ..exceptions import NotFoundError
from ..appointments.models import Appointment
from ..patients.models import Patient
from .models import Billing, BedStatus

# Set up logging
logger = logging.getLogger(__name__)

def count_patients(db: Session) -> int:
    return db.query(func.count(Patient.id)).scalar() or 0

def count_appointments_on(db: Session, on_date: Optional[date] = None) -> int:
    """Number of appointments dated ``on_date`` (today by default)."""
    on_date = on_date or date.today()
    return (
        db.query(func.count(Appointment.id))
        .filter(Appointment.date == on_date)
        .scalar()
    ) or 0

def pending_billing(db: Session) -> float:
    """Sum of amount_due over pending bills, 0 when there are none."""
    total = (
        db.query(func.sum(Billing.amount_due))
        .filter(Billing.status == "pending")
        .scalar()
    )
    return float(total or 0)

def bed_occupancy(db: Session) -> int:
    """
    Occupied beds as a whole percentage of total beds.

    Raises:
        NotFoundError: If no bed status row exists
    """
    beds = db.query(BedStatus).order_by(BedStatus.id.desc()).first()
    if not beds:
        raise NotFoundError("Bed data not found")
    if not beds.total_beds:
        logger.warning(f"Bed status {beds.id} reports zero total beds")
        return 0
    # Half-up, so 12.5 reports as 13
    percent = Decimal(beds.occupied_beds) * 100 / Decimal(beds.total_beds)
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
