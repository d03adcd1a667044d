"""
Dashboard source tables: billing and bed occupancy.
"""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from ..database import Base

class Billing(Base):
    __tablename__ = "billing"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="SET NULL"), nullable=True)
    amount_due = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending")

class BedStatus(Base):
    __tablename__ = "beds_status"

    id = Column(Integer, primary_key=True, index=True)
    occupied_beds = Column(Integer, nullable=False, default=0)
    total_beds = Column(Integer, nullable=False, default=0)
