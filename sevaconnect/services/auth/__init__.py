"""
Authentication service layer.
"""

from sevaconnect.services.auth.auth_service import AuthService

__all__ = ["AuthService"]
