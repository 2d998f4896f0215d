"""
Booking lifecycle service.

Creates bookings with a frozen price, lists them with display fields and
moves them through the guarded transitions. ``update_status`` is a separate
administrative override that bypasses the transition table.
"""

from typing import Any, Callable, Dict, List, Mapping, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import InvalidStateError, ResourceNotFoundError, ValidationError
from sevaconnect.models.base.enums import BookingStatus, UserRole
from sevaconnect.models.booking.booking import Booking
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.catalogue import SocietyServiceRepository
from sevaconnect.repositories.user import UserRepository
from sevaconnect.schemas.booking.booking import BookingCreate, BookingPatch, BookingResponse
from sevaconnect.services.base import BaseService, ServiceResult
from sevaconnect.services.catalogue.offering_resolver import resolve_offering


def _set(column: str) -> Callable[[Booking, Any], None]:
    def apply(booking: Booking, value: Any) -> None:
        setattr(booking, column, value)
    return apply


def _set_required(column: str) -> Callable[[Booking, Any], None]:
    def apply(booking: Booking, value: Any) -> None:
        if value is None:
            raise ValidationError(f"{column} cannot be null", field=column)
        setattr(booking, column, value)
    return apply


# Fields a booking patch may touch
_PATCH_APPLIERS: Dict[str, Callable[[Booking, Any], None]] = {
    "date": _set_required("date"),
    "start_time": _set_required("start_time"),
    "end_time": _set_required("end_time"),
    "status": _set_required("status"),
    "start_otp": _set("start_otp"),
    "end_otp": _set("end_otp"),
    "custom_price": _set("custom_price"),
}


def to_booking_response(row: Mapping[str, Any]) -> BookingResponse:
    """Flatten a display row (booking plus joined fields) into a response."""
    booking = row["booking"]
    data = {
        name: getattr(booking, name)
        for name in BookingResponse.model_fields
        if hasattr(booking, name)
    }
    data.update({key: value for key, value in row.items() if key != "booking"})
    return BookingResponse.model_validate(data)


def parse_status(value: Union[BookingStatus, str]) -> BookingStatus:
    try:
        return value if isinstance(value, BookingStatus) else BookingStatus(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown booking status: {value}", field="status")


class BookingService(BaseService):
    """
    Booking creation, queries and status changes.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = BookingRepository(db_session)
        self.offering_repository = SocietyServiceRepository(db_session)
        self.user_repository = UserRepository(db_session)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_booking(
        self,
        data: Union[BookingCreate, Mapping[str, Any]],
    ) -> ServiceResult[BookingResponse]:
        """
        Create a booking in REQUESTED state.

        The offering's effective price is frozen into ``price_at_booking``
        unless the caller supplied one. No availability check is made.

        Args:
            data: Offering, household, maid, schedule and optional
                recurrence and price overrides

        Returns:
            ServiceResult containing the booking with display fields
        """
        try:
            request = self._coerce(BookingCreate, data)

            with self.transaction():
                row = self.offering_repository.get_with_service(request.society_service_id)
                if row is None:
                    raise ResourceNotFoundError("SocietyService", request.society_service_id)
                offering, service = row
                if not offering.is_active:
                    raise InvalidStateError(
                        "This service is no longer offered by the society",
                        current_state="inactive",
                    )

                self.user_repository.get_or_raise(request.household_id)
                self.user_repository.get_or_raise(request.maid_id)

                price = request.price_at_booking
                if price is None:
                    price = resolve_offering(offering, service).effective_price

                booking = self.repository.create(
                    Booking(
                        society_service_id=offering.id,
                        household_id=request.household_id,
                        maid_id=request.maid_id,
                        date=request.date,
                        start_time=request.start_time,
                        end_time=request.end_time,
                        status=BookingStatus.REQUESTED,
                        start_otp=None,
                        end_otp=None,
                        maid_requested_start=False,
                        maid_requested_end=False,
                        is_recurring=request.is_recurring,
                        frequency=request.frequency,
                        custom_frequency_days=request.custom_frequency_days,
                        is_reviewed=False,
                        custom_price=request.custom_price,
                        custom_description=request.custom_description,
                        price_at_booking=price,
                    )
                )
                response = to_booking_response(self.repository.get_display(booking.id))

            self._log_operation(
                "create booking",
                booking.id,
                society_service_id=offering.id,
                price_at_booking=str(price),
            )
            return ServiceResult.success(response, message="Booking requested")
        except Exception as e:
            return self._handle_exception(e, "create booking")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> ServiceResult[BookingResponse]:
        try:
            return ServiceResult.success(self._display(booking_id))
        except Exception as e:
            return self._handle_exception(e, "get booking", booking_id)

    def list_bookings_for_user(
        self,
        user_id: str,
        role: Union[UserRole, str],
    ) -> ServiceResult[List[BookingResponse]]:
        """
        List a user's bookings, newest date and start time first.

        Maids see bookings assigned to them, households the ones they made
        and society admins every booking of their society.
        """
        try:
            role = UserRole(role)
        except ValueError:
            return ServiceResult.validation_failure(f"Unknown role: {role}", field="role")

        try:
            if role is UserRole.MAID:
                rows = self.repository.list_for_maid(user_id)
            elif role is UserRole.HOUSEHOLD:
                rows = self.repository.list_for_household(user_id)
            elif role is UserRole.SOCIETY_ADMIN:
                admin = self.user_repository.get_or_raise(user_id)
                rows = self.repository.list_for_society(admin.society_id)
            else:
                raise ValidationError(f"Bookings are not listed for role {role.value}", field="role")

            return ServiceResult.success(
                [to_booking_response(r) for r in rows],
                metadata={"count": len(rows)},
            )
        except Exception as e:
            return self._handle_exception(e, "list bookings", user_id)

    def list_bookings_for_society(self, society_id: str) -> ServiceResult[List[BookingResponse]]:
        """Bookings made by households of ``society_id``."""
        try:
            rows = self.repository.list_for_society(society_id)
            return ServiceResult.success(
                [to_booking_response(r) for r in rows],
                metadata={"count": len(rows)},
            )
        except Exception as e:
            return self._handle_exception(e, "list society bookings", society_id)

    def _display(self, booking_id: str) -> BookingResponse:
        row = self.repository.get_display(booking_id)
        if row is None:
            raise ResourceNotFoundError("Booking", booking_id)
        return to_booking_response(row)

    # -------------------------------------------------------------------------
    # Guarded transitions
    # -------------------------------------------------------------------------

    def confirm_booking(self, booking_id: str) -> ServiceResult[BookingResponse]:
        return self._transition(booking_id, BookingStatus.CONFIRMED, "confirm booking")

    def reject_booking(self, booking_id: str) -> ServiceResult[BookingResponse]:
        return self._transition(booking_id, BookingStatus.REJECTED, "reject booking")

    def cancel_booking(self, booking_id: str) -> ServiceResult[BookingResponse]:
        return self._transition(booking_id, BookingStatus.CANCELLED, "cancel booking")

    def _transition(
        self,
        booking_id: str,
        target: BookingStatus,
        operation: str,
    ) -> ServiceResult[BookingResponse]:
        try:
            with self.transaction():
                booking = self.repository.get_or_raise(booking_id)
                current = booking.status
                if not current.can_transition_to(target):
                    raise InvalidStateError(
                        f"Cannot move a {current.value} booking to {target.value}",
                        current_state=current.value,
                        requested_state=target.value,
                    )
                self.repository.update(booking, {"status": target})
                response = self._display(booking_id)

            self._log_operation(operation, booking_id, from_status=current.value, to_status=target.value)
            return ServiceResult.success(response)
        except Exception as e:
            return self._handle_exception(e, operation, booking_id)

    # -------------------------------------------------------------------------
    # Administrative changes
    # -------------------------------------------------------------------------

    def update_status(
        self,
        booking_id: str,
        status: Union[BookingStatus, str],
    ) -> ServiceResult[BookingResponse]:
        """
        Administrative override: set any status unconditionally.

        This does not consult the transition table. Use the guarded
        transitions or OTP verification for the normal lifecycle.
        """
        try:
            target = parse_status(status)
            with self.transaction():
                booking = self.repository.get_or_raise(booking_id)
                previous = booking.status
                self.repository.update(booking, {"status": target})
                response = self._display(booking_id)

            self._logger.warning(
                f"Booking {booking_id} status overridden {previous.value} -> {target.value}",
                extra={"booking_id": booking_id, "from_status": previous.value, "to_status": target.value},
            )
            return ServiceResult.success(response, message="Booking status updated")
        except Exception as e:
            return self._handle_exception(e, "update booking status", booking_id)

    def update_booking(
        self,
        booking_id: str,
        data: Union[BookingPatch, Mapping[str, Any]],
    ) -> ServiceResult[BookingResponse]:
        """
        Patch a booking.

        Only date, start_time, end_time, status, start_otp, end_otp and
        custom_price may change; other fields are rejected and omitted
        fields are untouched. ``price_at_booking`` is never recomputed.
        """
        try:
            changes = self._coerce(BookingPatch, data).changes()

            with self.transaction():
                booking = self.repository.get_or_raise(booking_id)
                for field_name, value in changes.items():
                    _PATCH_APPLIERS[field_name](booking, value)
                if booking.end_time <= booking.start_time:
                    raise ValidationError("end_time must be after start_time", field="end_time")
                self.repository.flush()
                response = self._display(booking_id)

            self._log_operation("update booking", booking_id, fields=sorted(changes))
            return ServiceResult.success(response, message="Booking updated")
        except Exception as e:
            return self._handle_exception(e, "update booking", booking_id)

