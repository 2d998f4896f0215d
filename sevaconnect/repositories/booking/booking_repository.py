"""
Booking repository.

Besides plain row access this provides the joined listing used for display
and the conditional status update that OTP verification relies on.
"""

from datetime import date as Date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session, aliased

from sevaconnect.models.base.enums import BookingStatus, TERMINAL_BOOKING_STATUSES
from sevaconnect.models.booking.booking import Booking
from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.models.user.user import User
from sevaconnect.repositories.base.base_repository import BaseRepository

ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS)


class BookingRepository(BaseRepository[Booking]):
    """Booking access and lifecycle updates."""

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    # ==================== Display Queries ====================

    def _display_query(self):
        maid = aliased(User, name="maid")
        household = aliased(User, name="household")
        stmt = (
            select(
                Booking,
                SocietyService.name.label("offering_name"),
                SocietyService.icon.label("offering_icon"),
                Service.name.label("service_name"),
                Service.icon.label("service_icon"),
                maid.name.label("maid_name"),
                household.name.label("household_name"),
                household.address.label("household_address"),
                household.phone.label("household_phone"),
            )
            .join(maid, Booking.maid_id == maid.id)
            .join(household, Booking.household_id == household.id)
            .outerjoin(SocietyService, Booking.society_service_id == SocietyService.id)
            .outerjoin(Service, SocietyService.service_id == Service.id)
            .order_by(Booking.date.desc(), Booking.start_time.desc())
        )
        return stmt, maid, household

    def _display_rows(self, stmt) -> List[Dict[str, Any]]:
        rows = []
        for row in self.db.execute(stmt):
            rows.append({
                "booking": row.Booking,
                # Offering override first, then the catalogue value
                "service_name": row.offering_name if row.offering_name is not None else row.service_name,
                "service_icon": row.offering_icon or row.service_icon,
                "maid_name": row.maid_name,
                "household_name": row.household_name,
                "household_address": row.household_address,
                "household_phone": row.household_phone,
            })
        return rows

    def list_for_maid(self, maid_id: str) -> List[Dict[str, Any]]:
        stmt, _, _ = self._display_query()
        return self._display_rows(stmt.where(Booking.maid_id == maid_id))

    def list_for_household(self, household_id: str) -> List[Dict[str, Any]]:
        stmt, _, _ = self._display_query()
        return self._display_rows(stmt.where(Booking.household_id == household_id))

    def list_for_society(self, society_id: str) -> List[Dict[str, Any]]:
        stmt, _, household = self._display_query()
        return self._display_rows(stmt.where(household.society_id == society_id))

    def get_display(self, booking_id: str) -> Optional[Dict[str, Any]]:
        stmt, _, _ = self._display_query()
        rows = self._display_rows(stmt.where(Booking.id == booking_id))
        return rows[0] if rows else None

    # ==================== Lifecycle Updates ====================

    def transition_if_open(
        self,
        booking_id: str,
        target: BookingStatus,
        otp_column: Optional[str] = None,
        otp_value: Optional[str] = None,
    ) -> int:
        """
        Set ``status`` to ``target`` in one statement, only while the booking
        is not terminal and, when ``otp_column`` is given, only while that
        column still holds ``otp_value``.

        Returns the number of rows changed (0 or 1).
        """
        stmt = (
            update(Booking)
            .where(Booking.id == booking_id)
            .where(Booking.status.notin_(tuple(TERMINAL_BOOKING_STATUSES)))
            .where(Booking.status != target)
        )
        if otp_column is not None:
            stmt = stmt.where(getattr(Booking, otp_column) == otp_value)

        result = self.db.execute(
            stmt.values(status=target).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def refresh(self, booking: Booking) -> Booking:
        self.db.refresh(booking)
        return booking

    # ==================== Aggregates ====================

    def count_active_on(self, society_id: str, day: Date) -> int:
        stmt = (
            select(func.count(Booking.id))
            .select_from(Booking)
            .join(User, Booking.household_id == User.id)
            .where(User.society_id == society_id)
            .where(Booking.date == day)
            .where(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        )
        return int(self.db.scalar(stmt) or 0)

    def count_expected_between(self, society_id: str, start: Date, end: Date) -> int:
        stmt = (
            select(func.count(Booking.id))
            .select_from(Booking)
            .join(User, Booking.household_id == User.id)
            .where(User.society_id == society_id)
            .where(Booking.date >= start, Booking.date <= end)
            .where(Booking.status.in_((BookingStatus.REQUESTED,) + ACTIVE_BOOKING_STATUSES))
        )
        return int(self.db.scalar(stmt) or 0)

    def ids_for_user(self, user_id: str) -> List[str]:
        stmt = select(Booking.id).where(
            or_(Booking.household_id == user_id, Booking.maid_id == user_id)
        )
        return list(self.db.scalars(stmt))

    def delete_ids(self, booking_ids: List[str]) -> int:
        if not booking_ids:
            return 0
        result = self.db.execute(
            delete(Booking).where(Booking.id.in_(booking_ids)).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
