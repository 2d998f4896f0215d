"""
Society service layer.
"""

from sevaconnect.services.society.society_management_service import SocietyManagementService

__all__ = ["SocietyManagementService"]
