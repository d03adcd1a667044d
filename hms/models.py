"""
Import every model so that Base.metadata knows all tables.
"""
from .patients.models import Patient, PatientStatus  # noqa: F401
from .appointments.models import Appointment  # noqa: F401
from .lab.models import LabRecord  # noqa: F401
from .emr.models import Medication, EmrNote, Diagnosis, Prescription, Allergy  # noqa: F401
from .telemedicine.models import (  # noqa: F401
    TelemedicineAppointment,
    TelemedicinePrescription,
    TelemedicineMessage,
)
from .auth.models import User  # noqa: F401
from .metrics.models import Billing, BedStatus  # noqa: F401
