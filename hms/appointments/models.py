"""
Appointment Model - Stores clinic appointment scheduling.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, Time, func
from ..database import Base

DEFAULT_STATUS = "scheduled"

class Appointment(Base):
    """
    Appointment Model - Stores appointment information

    Column names are camelCase to match the table the frontend was built against.

    Fields:
    - id: Primary key for appointment
    - patientName: Name of the patient
    - doctorName: Name of the doctor
    - date: Appointment day
    - time: Appointment time, always stored with seconds
    - reason: Reason for the visit
    - status: Free-form status, "scheduled" by default
    - createdAt: When the appointment was created
    - updatedAt: When the appointment was last updated
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patientName = Column(String(255), nullable=False, index=True)
    doctorName = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default=DEFAULT_STATUS)
    createdAt = Column(DateTime, server_default=func.now())
    updatedAt = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        """String representation of the Appointment model"""
        return f"<Appointment(id={self.id}, patient='{self.patientName}', date='{self.date}', time='{self.time}')>"
