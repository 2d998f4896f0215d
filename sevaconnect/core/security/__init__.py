"""Security module for credential hashing and access tokens."""

from .password_hasher import PasswordHasher
from .jwt_handler import JWTManager

__all__ = [
    "PasswordHasher",
    "JWTManager",
]
