"""
Booking OTP service.

Each booking has a ``start`` and an ``end`` phase. The maid asks for a code,
the household reads it out, and entering it advances the booking:
``start`` to IN_PROGRESS and ``end`` to COMPLETED. Codes are generated
locally and never expire.
"""

from typing import Optional, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import InvalidStateError, OtpVerificationError, ValidationError
from sevaconnect.models.base.enums import OtpPhase
from sevaconnect.models.booking.booking import Booking
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.schemas.booking.booking import BookingResponse, OtpIssued
from sevaconnect.services.base import BaseService, ServiceResult
from sevaconnect.services.booking.booking_service import to_booking_response
from sevaconnect.utils.identifiers import generate_otp


def parse_phase(value: Union[OtpPhase, str]) -> OtpPhase:
    if isinstance(value, OtpPhase):
        return value
    try:
        return OtpPhase(str(value).lower())
    except ValueError:
        raise ValidationError("phase must be 'start' or 'end'", field="phase")


class BookingOtpService(BaseService):
    """
    Issue, cancel, regenerate and verify booking phase codes.

    ``master_otp`` is an operational bypass accepted for every booking and
    phase.
    """

    def __init__(self, db_session: Session, master_otp: Optional[str] = None):
        super().__init__(db_session)
        self.repository = BookingRepository(db_session)
        self._master_otp = master_otp

    # -------------------------------------------------------------------------
    # Issuing
    # -------------------------------------------------------------------------

    def request_otp(self, booking_id: str, phase: Union[OtpPhase, str]) -> ServiceResult[OtpIssued]:
        """
        Issue a fresh code for ``phase`` and flag it as awaiting entry.

        The booking status is not changed.

        Returns:
            ServiceResult containing the issued code
        """
        try:
            phase = parse_phase(phase)
            code = generate_otp()
            with self.transaction() as ctx:
                booking = self.repository.get_or_raise(booking_id)
                self.repository.update(booking, self._otp_values(phase, code, requested=True))
                ctx.on_commit(lambda: self._log_issued("Generated", booking_id, phase, code))

            return ServiceResult.success(
                OtpIssued(booking_id=booking_id, phase=phase, otp=code),
                message="OTP generated",
            )
        except Exception as e:
            return self._handle_exception(e, "request OTP", booking_id)

    def regenerate_otp(self, booking_id: str, phase: Union[OtpPhase, str]) -> ServiceResult[OtpIssued]:
        """Replace the code for ``phase`` without touching its requested flag."""
        try:
            phase = parse_phase(phase)
            code = generate_otp()
            with self.transaction() as ctx:
                booking = self.repository.get_or_raise(booking_id)
                self.repository.update(booking, self._otp_values(phase, code))
                ctx.on_commit(lambda: self._log_issued("Regenerated", booking_id, phase, code))

            return ServiceResult.success(
                OtpIssued(booking_id=booking_id, phase=phase, otp=code),
                message="OTP regenerated",
            )
        except Exception as e:
            return self._handle_exception(e, "regenerate OTP", booking_id)

    def cancel_otp_request(self, booking_id: str, phase: Union[OtpPhase, str]) -> ServiceResult[bool]:
        """Clear the code and the requested flag for ``phase``. Safe to repeat."""
        try:
            phase = parse_phase(phase)
            with self.transaction():
                booking = self.repository.get_or_raise(booking_id)
                self.repository.update(booking, self._otp_values(phase, None, requested=False))

            self._log_operation("cancel OTP request", booking_id, phase=phase.value)
            return ServiceResult.success(True, message="OTP request cancelled")
        except Exception as e:
            return self._handle_exception(e, "cancel OTP request", booking_id)

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify_otp(
        self,
        booking_id: str,
        phase: Union[OtpPhase, str],
        code: str,
    ) -> ServiceResult[BookingResponse]:
        """
        Verify a submitted code and advance the booking.

        The code matches when it equals the stored code for ``phase`` or the
        master code. The status change is a single conditional update that
        only applies to a non-terminal booking, and for a stored-code match
        only while that code is still current. Phase order is not enforced.

        Returns:
            ServiceResult containing the updated booking, or an
            AUTHENTICATION_FAILED failure for a wrong code
        """
        try:
            phase = parse_phase(phase)
            code = (code or "").strip()
            target = phase.target_status

            with self.transaction():
                booking = self.repository.get_or_raise(booking_id)

                if self._master_otp and code == self._master_otp:
                    otp_column, otp_value = None, None
                    self._logger.info(
                        f"Master OTP accepted for booking {booking_id}",
                        extra={"booking_id": booking_id, "phase": phase.value},
                    )
                elif code and booking.otp_for(phase) == code:
                    otp_column, otp_value = f"{phase.value}_otp", code
                else:
                    raise OtpVerificationError(phase=phase.value)

                changed = self.repository.transition_if_open(
                    booking_id, target, otp_column=otp_column, otp_value=otp_value
                )
                self.repository.refresh(booking)

                if not changed:
                    self._check_unchanged(booking, phase)

                row = self.repository.get_display(booking_id)

            self._log_operation("verify OTP", booking_id, phase=phase.value, status=booking.status.value)
            return ServiceResult.success(to_booking_response(row), message="OTP verified")
        except Exception as e:
            return self._handle_exception(e, "verify OTP", booking_id)

    def _check_unchanged(self, booking: Booking, phase: OtpPhase) -> None:
        """
        Explain a conditional update that matched no row.

        A booking already at the target status was advanced by a concurrent
        submission and counts as success.
        """
        target = phase.target_status
        if booking.status == target:
            self._logger.info(
                f"Booking {booking.id} already {target.value}",
                extra={"booking_id": booking.id, "phase": phase.value},
            )
            return
        if booking.status.is_terminal:
            raise InvalidStateError(
                f"Booking is already {booking.status.value}",
                current_state=booking.status.value,
                requested_state=target.value,
            )
        # The stored code changed between the read and the update
        raise OtpVerificationError(phase=phase.value)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _otp_values(phase: OtpPhase, code: Optional[str], requested: Optional[bool] = None) -> dict:
        values = {f"{phase.value}_otp": code}
        if requested is not None:
            values[f"maid_requested_{phase.value}"] = requested
        return values

    def _log_issued(self, action: str, booking_id: str, phase: OtpPhase, code: str) -> None:
        self._logger.debug(
            f"{action} {phase.value} OTP for booking {booking_id}: {code}",
            extra={"booking_id": booking_id, "phase": phase.value},
        )
