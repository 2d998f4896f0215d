"""
Society management service.

Societies are created by the system administrator together with their
society admin account. Both rows are written in one transaction.
"""

from datetime import date as Date
from typing import Any, List, Mapping, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import DuplicateEntryError
from sevaconnect.core.security import PasswordHasher
from sevaconnect.models.base.enums import UserRole
from sevaconnect.models.society.society import Society
from sevaconnect.models.user.user import User
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.society import SocietyRepository
from sevaconnect.repositories.user import UserRepository
from sevaconnect.schemas.society.society import (
    SocietyActivity,
    SocietyCreate,
    SocietyCreated,
    SocietyResponse,
    SocietyStats,
    SocietyWithStats,
)
from sevaconnect.services.base import BaseService, ServiceResult


class SocietyManagementService(BaseService):
    """
    Create societies and report on them.
    """

    def __init__(
        self,
        db_session: Session,
        password_hasher: PasswordHasher,
        initial_password_length: int = 8,
    ):
        super().__init__(db_session)
        self.repository = SocietyRepository(db_session)
        self.user_repository = UserRepository(db_session)
        self.booking_repository = BookingRepository(db_session)
        self.hasher = password_hasher
        self.initial_password_length = initial_password_length

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_societies(self) -> ServiceResult[List[SocietyResponse]]:
        try:
            societies = self.repository.list_societies()
            return ServiceResult.success(
                [SocietyResponse.model_validate(s) for s in societies],
                metadata={"count": len(societies)},
            )
        except Exception as e:
            return self._handle_exception(e, "list societies")

    def get_society(self, society_id: str) -> ServiceResult[SocietyResponse]:
        try:
            society = self.repository.get_or_raise(society_id)
            return ServiceResult.success(SocietyResponse.model_validate(society))
        except Exception as e:
            return self._handle_exception(e, "get society", society_id)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_society(
        self,
        data: Union[SocietyCreate, Mapping[str, Any]],
    ) -> ServiceResult[SocietyCreated]:
        """
        Create a society and its admin account.

        The admin logs in with ``phone`` and the returned initial password,
        and must change it on first login. A failure at any step leaves
        neither row behind.

        Returns:
            ServiceResult containing the society id, admin id and initial
            password
        """
        try:
            request = self._coerce(SocietyCreate, data)

            if self.user_repository.is_phone_registered(request.phone):
                raise DuplicateEntryError(
                    "Admin phone number is already registered to another account.",
                    field="phone",
                )
            if self.repository.get_by_code(request.code) is not None:
                raise DuplicateEntryError("A society with this code already exists.", field="code")

            initial_password = request.initial_password or PasswordHasher.generate_initial_password(
                self.initial_password_length
            )

            with self.transaction():
                admin = self.user_repository.create(
                    User(
                        name=f"{request.name} Admin",
                        username=request.phone,
                        phone=request.phone,
                        password_hash=self.hasher.hash(initial_password),
                        role=UserRole.SOCIETY_ADMIN,
                        is_verified=True,
                        skills=[],
                        leaves=[],
                        must_change_password=True,
                    )
                )
                society = self.repository.create(
                    Society(name=request.name, address=request.address, code=request.code)
                )
                self.user_repository.update(admin, {"society_id": society.id})

            self._log_operation("create society", society.id, admin_id=admin.id)
            return ServiceResult.success(
                SocietyCreated(
                    society_id=society.id,
                    admin_id=admin.id,
                    initial_password=initial_password,
                ),
                message="Society created",
            )
        except Exception as e:
            return self._handle_exception(e, "create society")

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_society_stats(self, society_id: str, today: Date) -> ServiceResult[SocietyStats]:
        """
        Dashboard counters for a society admin.

        Args:
            society_id: Society to report on
            today: The local date whose confirmed and in-progress bookings
                are counted
        """
        try:
            self.repository.get_or_raise(society_id)
            members = self.user_repository.list_society_members(society_id)
            return ServiceResult.success(
                SocietyStats(
                    total_users=len(members),
                    pending_verifications=sum(1 for m in members if not m.is_verified),
                    active_bookings_today=self.booking_repository.count_active_on(society_id, today),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "get society stats", society_id)

    def list_societies_with_stats(self, start: Date, end: Date) -> ServiceResult[List[SocietyWithStats]]:
        """
        Every society with household and maid counts and the bookings
        expected between ``start`` and ``end`` inclusive.
        """
        try:
            results = []
            for society in self.repository.list_societies():
                results.append(
                    SocietyWithStats(
                        id=society.id,
                        created_at=society.created_at,
                        name=society.name,
                        address=society.address,
                        code=society.code,
                        household_count=self.user_repository.count_by_role(society.id, UserRole.HOUSEHOLD),
                        maid_count=self.user_repository.count_by_role(society.id, UserRole.MAID),
                        expected_bookings=self.booking_repository.count_expected_between(society.id, start, end),
                    )
                )
            return ServiceResult.success(results, metadata={"count": len(results)})
        except Exception as e:
            return self._handle_exception(e, "list societies with stats")

    def get_recent_activity(self, society_id: str, limit: int = 5) -> ServiceResult[List[SocietyActivity]]:
        """Latest registrations in a society."""
        try:
            members = self.user_repository.recent_members(society_id, limit)
            return ServiceResult.success(
                [
                    SocietyActivity(user_id=m.id, name=m.name, role=m.role, is_verified=m.is_verified)
                    for m in members
                ]
            )
        except Exception as e:
            return self._handle_exception(e, "get recent activity", society_id)
