"""
User service layer.
"""

from sevaconnect.services.users.user_service import UserService, to_user_response

__all__ = ["UserService", "to_user_response"]
