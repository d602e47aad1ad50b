from .auth import auth_bp
from .patient import patient_bp
from .health import health_bp

__all__ = ['auth_bp', 'patient_bp', 'health_bp']
