from sevaconnect.schemas.user.user import LeaveRequest, ProfileUpdate, UserResponse

__all__ = ["LeaveRequest", "ProfileUpdate", "UserResponse"]
