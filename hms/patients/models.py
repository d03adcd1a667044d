"""
Patient Model - Stores patient demographics and attendance status.
"""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, func
from ..database import Base

class PatientStatus(str, enum.Enum):
    """Enum for patient attendance status"""
    NOT_ATTENDED = "Not Attended"
    ATTENDED = "Attended"

class Patient(Base):
    """
    Patient Model - Stores patient information

    Fields:
    - id: Primary key for patient
    - name: Patient's full name
    - email: Contact email address
    - phone: Contact phone number (10 digits)
    - dob: Date of birth
    - address: Postal address
    - notes: Free-text notes
    - status: Attendance status (Not Attended / Attended)
    - gender, insurance, insurance_provider, insurance_policy, family_history:
      Optional EMR demographics
    - created_at: When the patient was registered
    - updated_at: When the patient was last updated
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    dob = Column(Date, nullable=False)
    address = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=PatientStatus.NOT_ATTENDED.value)
    gender = Column(String(20), nullable=True)
    insurance = Column(String(255), nullable=True)
    insurance_provider = Column(String(255), nullable=True)
    insurance_policy = Column(String(255), nullable=True)
    family_history = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, name='{self.name}')>"
