"""
User management service.

Profiles, society membership listings, admin verification, maid skills and
leave markers, and account deletion.
"""

from datetime import date as Date
from typing import Any, Iterable, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import ValidationError
from sevaconnect.models.base.enums import LeavePeriod, UserRole
from sevaconnect.models.user.user import User
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.communication import MessageRepository
from sevaconnect.repositories.review import ReviewRepository
from sevaconnect.repositories.user import UserRepository
from sevaconnect.schemas.user.user import LeaveRequest, ProfileUpdate, UserResponse
from sevaconnect.services.base import BaseService, ServiceResult


def to_user_response(user: User, reviews: ReviewRepository) -> UserResponse:
    """Serialize a user, adding the rating summary for maids."""
    response = UserResponse.model_validate(user)
    if user.role is UserRole.MAID:
        count, average = reviews.rating_stats(user.id)
        response.review_count = count
        response.rating = round(average, 1) if count else 0.0
    return response


def leave_marker(day: Date, period: Optional[LeavePeriod]) -> str:
    return f"{day.isoformat()}:{period.value}" if period else day.isoformat()


def _marker_date(marker: str) -> str:
    return marker.split(":", 1)[0]


class UserService(BaseService):
    """
    Read and maintain user accounts.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = UserRepository(db_session)
        self.review_repository = ReviewRepository(db_session)
        self.booking_repository = BookingRepository(db_session)
        self.message_repository = MessageRepository(db_session)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_user(self, user_id: str) -> ServiceResult[UserResponse]:
        try:
            user = self.repository.get_or_raise(user_id)
            return ServiceResult.success(to_user_response(user, self.review_repository))
        except Exception as e:
            return self._handle_exception(e, "get user", user_id)

    def list_society_users(self, society_id: str) -> ServiceResult[List[UserResponse]]:
        """Maids and households of a society. Society admins are left out."""
        try:
            users = self.repository.list_society_members(society_id)
            return ServiceResult.success(
                [to_user_response(u, self.review_repository) for u in users],
                metadata={"count": len(users)},
            )
        except Exception as e:
            return self._handle_exception(e, "list society users", society_id)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    def update_profile(
        self,
        user_id: str,
        data: Union[ProfileUpdate, Mapping[str, Any]],
    ) -> ServiceResult[UserResponse]:
        """
        Update name, address or avatar.

        Other fields, including the role and password, are rejected.
        """
        try:
            changes = self._coerce(ProfileUpdate, data).changes()
            if "name" in changes and not changes["name"]:
                raise ValidationError("name cannot be empty", field="name")

            with self.transaction():
                user = self.repository.get_or_raise(user_id)
                self.repository.update(user, changes)

            self._log_operation("update profile", user_id, fields=sorted(changes))
            return ServiceResult.success(to_user_response(user, self.review_repository))
        except Exception as e:
            return self._handle_exception(e, "update profile", user_id)

    def verify_user(self, user_id: str) -> ServiceResult[UserResponse]:
        """Approve a maid or household after the society admin's review."""
        try:
            with self.transaction():
                user = self.repository.get_or_raise(user_id)
                self.repository.update(user, {"is_verified": True})

            self._log_operation("verify user", user_id, role=user.role.value)
            return ServiceResult.success(
                to_user_response(user, self.review_repository),
                message="User verified",
            )
        except Exception as e:
            return self._handle_exception(e, "verify user", user_id)

    def update_skills(self, user_id: str, skills: Iterable[str]) -> ServiceResult[UserResponse]:
        """Replace a maid's skill tags, dropping blanks and duplicates."""
        try:
            cleaned = list(dict.fromkeys(s.strip() for s in (skills or []) if s and s.strip()))
            with self.transaction():
                user = self._get_maid(user_id)
                self.repository.update(user, {"skills": cleaned})

            return ServiceResult.success(to_user_response(user, self.review_repository))
        except Exception as e:
            return self._handle_exception(e, "update skills", user_id)

    # -------------------------------------------------------------------------
    # Leave
    # -------------------------------------------------------------------------

    def set_leave(
        self,
        user_id: str,
        data: Union[LeaveRequest, Mapping[str, Any]],
    ) -> ServiceResult[List[str]]:
        """
        Set or clear a maid's leave for one date.

        Any marker for the date is replaced by ``date:PERIOD``; a null
        period clears the date.

        Returns:
            ServiceResult containing the maid's leave markers
        """
        try:
            request = self._coerce(LeaveRequest, data)
            day = request.date.isoformat()

            with self.transaction():
                user = self._get_maid(user_id)
                leaves = [m for m in (user.leaves or []) if _marker_date(m) != day]
                if request.period is not None:
                    leaves.append(leave_marker(request.date, request.period))
                self.repository.update(user, {"leaves": sorted(leaves)})

            self._log_operation(
                "set leave", user_id, date=day, period=request.period.value if request.period else None
            )
            return ServiceResult.success(list(user.leaves))
        except Exception as e:
            return self._handle_exception(e, "set leave", user_id)

    def toggle_leave(self, user_id: str, day: Date) -> ServiceResult[List[str]]:
        """Clear the date if any leave is marked on it, else mark a full day."""
        try:
            marker = day.isoformat()
            with self.transaction():
                user = self._get_maid(user_id)
                current = list(user.leaves or [])
                leaves = [m for m in current if _marker_date(m) != marker]
                if len(leaves) == len(current):
                    leaves.append(marker)
                self.repository.update(user, {"leaves": sorted(leaves)})

            return ServiceResult.success(list(user.leaves))
        except Exception as e:
            return self._handle_exception(e, "toggle leave", user_id)

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def delete_user(self, user_id: str) -> ServiceResult[bool]:
        """
        Delete a maid or household with their bookings and related records.

        Messages and reviews attached to the user's bookings go too. Admin
        accounts cannot be deleted.
        """
        try:
            with self.transaction():
                user = self.repository.get_or_raise(user_id)
                if user.role.is_admin:
                    raise ValidationError("Cannot delete admin accounts", field="role")

                booking_ids = self.booking_repository.ids_for_user(user_id)
                messages = self.message_repository.delete_for_sender_or_bookings(user_id, booking_ids)
                reviews = self.review_repository.delete_for_maid_or_bookings(user_id, booking_ids)
                bookings = self.booking_repository.delete_ids(booking_ids)
                self.repository.delete(user)

            self._logger.warning(
                f"User {user_id} deleted",
                extra={
                    "user_id": user_id,
                    "deleted_bookings": bookings,
                    "deleted_messages": messages,
                    "deleted_reviews": reviews,
                },
            )
            return ServiceResult.success(True, message="User deleted")
        except Exception as e:
            return self._handle_exception(e, "delete user", user_id)

    def _get_maid(self, user_id: str) -> User:
        user = self.repository.get_or_raise(user_id)
        if user.role is not UserRole.MAID:
            raise ValidationError("Only maids have skills and leave", field="role")
        return user
