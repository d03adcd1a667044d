"""
Telemedicine Models - Remote consultations, prescriptions and chat messages.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from ..database import Base

class TelemedicineAppointment(Base):
    """Video consultation slot"""
    __tablename__ = "telemedicine_appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    specialty = Column(String(255), nullable=False)
    date_time = Column(DateTime, nullable=False)
    status = Column(String(50), nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)

class TelemedicinePrescription(Base):
    """Prescription sent during a consultation"""
    __tablename__ = "telemedicine_prescriptions"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    medication = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=True)
    duration = Column(String(100), nullable=True)
    instructions = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="sent")

class TelemedicineMessage(Base):
    """Chat message between patient and clinician"""
    __tablename__ = "telemedicine_messages"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    sender = Column(String(100), nullable=False)
    timestamp = Column(DateTime, server_default=func.now())
