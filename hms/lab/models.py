"""
Lab/Imaging Model - Stores laboratory and imaging results per patient.
"""
from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey
from ..database import Base

class LabRecord(Base):
    """
    Lab Record Model - One test or imaging study

    Fields:
    - id: Primary key
    - patient_id: Foreign key to patients
    - test_type: Kind of test (e.g. "CBC", "Chest X-Ray")
    - test_date: Day the test was taken
    - result: Free-text result; "abnormal" anywhere in it raises an EMR alert
    - technician_name: Who performed the test
    """
    __tablename__ = "lab_imaging"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    test_type = Column(String(255), nullable=False)
    test_date = Column(Date, nullable=False)
    result = Column(Text, nullable=True)
    technician_name = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<LabRecord(id={self.id}, patient_id={self.patient_id}, test_type='{self.test_type}')>"
