from .doctor import Doctor
from .appointment import Appointment
from .prescription import Prescription
from .medical_file import MedicalFile

__all__ = ["Doctor", "Appointment", "Prescription", "MedicalFile"]
