"""
EMR Models - Clinical records attached to a patient.

These tables are optional from the EMR endpoint's point of view: a deployment
that never created one of them still gets a complete (empty) collection.
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, func
from ..database import Base

class Medication(Base):
    """Current or past medication on a patient's chart"""
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=True)
    frequency = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=True)

class EmrNote(Base):
    """
    Visit note written by a doctor

    Fields:
    - visit_date: Day of the visit
    - notes: Note text
    - doctor_id: Identifier of the authoring doctor
    - doctor_name: Display name of the doctor, when known
    """
    __tablename__ = "emr_notes"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    visit_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=False)
    doctor_id = Column(String(50), nullable=False)
    doctor_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

class Diagnosis(Base):
    """Diagnosis, optionally linked to the note it was recorded in"""
    __tablename__ = "emr_diagnoses"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    emr_note_id = Column(Integer, ForeignKey("emr_notes.id", ondelete="SET NULL"), nullable=True)
    diagnosis_code = Column(String(20), nullable=True)
    description = Column(Text, nullable=False)
    severity = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

class Prescription(Base):
    """Prescription, optionally linked to the note it was written in"""
    __tablename__ = "emr_prescriptions"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    emr_note_id = Column(Integer, ForeignKey("emr_notes.id", ondelete="SET NULL"), nullable=True)
    medication_name = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=True)
    duration = Column(String(100), nullable=True)
    instructions = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

class Allergy(Base):
    """Known allergy"""
    __tablename__ = "emr_allergies"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    allergen = Column(String(255), nullable=False)
    reaction = Column(String(255), nullable=True)
    severity = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
