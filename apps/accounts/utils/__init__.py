"""계정 관련 유틸리티"""

from .email import send_password_reset_email, send_welcome_email
from .validators import validate_password_confirmation, validate_password_strength

__all__ = [
    "send_password_reset_email",
    "send_welcome_email",
    "validate_password_confirmation",
    "validate_password_strength",
]
