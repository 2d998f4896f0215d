from sevaconnect.schemas.auth.auth import (
    LoginRequest,
    LoginResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegistrationRequest,
    RegistrationStart,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "RegistrationRequest",
    "RegistrationStart",
]
