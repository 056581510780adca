from .health import health_bp
from .doctor import doctor_bp
from .appointment import appointment_bp
from .prescription import prescription_bp
from .medical_file import medical_file_bp

__all__ = ['health_bp', 'doctor_bp', 'appointment_bp', 'prescription_bp', 'medical_file_bp']
