from .user_serializer import (
    EmailVerificationSerializer,
    MessageSerializer,
    PasswordChangeSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    UserSignUpSerializer,
)

__all__ = [
    "UserSerializer",
    "UserSignUpSerializer",
    "ProfileUpdateSerializer",
    "EmailVerificationSerializer",
    "PasswordResetRequestSerializer",
    "PasswordResetConfirmSerializer",
    "PasswordChangeSerializer",
    "MessageSerializer",
]
