from datetime import time, timedelta
from decimal import Decimal

from sevaconnect.models.base.enums import BookingFrequency, BookingStatus, UserRole
from sevaconnect.services.base import ErrorCode


def test_new_booking_is_requested_with_frozen_price(booking, household, maid):
    assert booking.id.startswith("bk-")
    assert booking.status is BookingStatus.REQUESTED
    assert booking.price_at_booking == Decimal("500")
    assert booking.start_otp is None and booking.end_otp is None
    assert booking.maid_requested_start is False and booking.maid_requested_end is False
    assert booking.is_reviewed is False
    assert booking.service_name == {"en": "Cleaning"}
    assert booking.service_icon == "broom"
    assert booking.maid_name == maid.name
    assert booking.household_name == household.name
    assert booking.household_address == "Flat 4B"


def test_price_snapshot_survives_later_price_changes(services, booking, offering, cleaning):
    services.offerings.update_offering(offering.id, {"price": Decimal("600")}).unwrap()
    services.catalogue.update_service(cleaning.id, {"base_price": Decimal("700")}).unwrap()

    assert services.bookings.get_booking(booking.id).unwrap().price_at_booking == Decimal("500")


def test_override_price_is_snapshotted(services, offering, booking_payload):
    services.offerings.update_offering(offering.id, {"price": Decimal("600")}).unwrap()
    created = services.bookings.create_booking(booking_payload).unwrap()
    assert created.price_at_booking == Decimal("600")


def test_caller_supplied_price_is_used(services, booking_payload):
    created = services.bookings.create_booking({**booking_payload, "price_at_booking": Decimal("450")}).unwrap()
    assert created.price_at_booking == Decimal("450")


def test_recurring_booking_is_a_single_row(services, booking_payload, household):
    created = services.bookings.create_booking({
        **booking_payload,
        "is_recurring": True,
        "frequency": "CUSTOM",
        "custom_frequency_days": 3,
    }).unwrap()
    assert created.frequency is BookingFrequency.CUSTOM
    assert created.custom_frequency_days == 3
    assert len(services.bookings.list_bookings_for_user(household.id, UserRole.HOUSEHOLD).unwrap()) == 1


def test_custom_frequency_needs_days(services, booking_payload):
    result = services.bookings.create_booking({**booking_payload, "is_recurring": True, "frequency": "CUSTOM"})
    assert result.error_code == ErrorCode.VALIDATION_ERROR


def test_end_must_follow_start(services, booking_payload):
    result = services.bookings.create_booking({**booking_payload, "end_time": time(8, 0)})
    assert result.error_code == ErrorCode.VALIDATION_ERROR


def test_unknown_offering_is_not_found(services, booking_payload):
    result = services.bookings.create_booking({**booking_payload, "society_service_id": "ss-missing"})
    assert result.error_code == ErrorCode.NOT_FOUND


def test_inactive_offering_cannot_be_booked(services, offering, booking_payload):
    services.offerings.delete_offering(offering.id).unwrap()
    result = services.bookings.create_booking(booking_payload)
    assert result.error_code == ErrorCode.INVALID_STATE


def test_unknown_maid_is_not_found(services, booking_payload):
    result = services.bookings.create_booking({**booking_payload, "maid_id": "u-missing"})
    assert result.error_code == ErrorCode.NOT_FOUND


def test_booking_survives_offering_soft_delete(services, booking, offering):
    services.offerings.delete_offering(offering.id).unwrap()
    fetched = services.bookings.get_booking(booking.id).unwrap()
    assert fetched.society_service_id == offering.id
    assert fetched.service_name == {"en": "Cleaning"}


def test_missing_booking_is_not_found(services):
    assert services.bookings.get_booking("bk-missing").error_code == ErrorCode.NOT_FOUND


class TestListing:
    def test_newest_first_for_each_role(self, services, booking_payload, household, maid, society):
        earlier = services.bookings.create_booking(booking_payload).unwrap()
        later = services.bookings.create_booking(
            {**booking_payload, "date": booking_payload["date"] + timedelta(days=2)}
        ).unwrap()
        same_day_late = services.bookings.create_booking(
            {**booking_payload, "start_time": time(15, 0), "end_time": time(16, 0)}
        ).unwrap()
        expected = [later.id, same_day_late.id, earlier.id]

        for user_id, role in ((household.id, "HOUSEHOLD"), (maid.id, UserRole.MAID)):
            listed = services.bookings.list_bookings_for_user(user_id, role).unwrap()
            assert [b.id for b in listed] == expected

        members = services.users.list_society_users(society.society_id).unwrap()
        assert all(u.role is not UserRole.SOCIETY_ADMIN for u in members)
        assert [b.id for b in services.bookings.list_bookings_for_society(society.society_id).unwrap()] == expected
        assert [
            b.id for b in services.bookings.list_bookings_for_user(society.admin_id, UserRole.SOCIETY_ADMIN).unwrap()
        ] == expected

    def test_unknown_role_is_a_validation_failure(self, services, household):
        result = services.bookings.list_bookings_for_user(household.id, "GARDENER")
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_user_without_bookings_gets_empty_list(self, services, maid):
        assert services.bookings.list_bookings_for_user(maid.id, UserRole.MAID).unwrap() == []


class TestTransitions:
    def test_confirm_then_cancel(self, services, booking):
        assert services.bookings.confirm_booking(booking.id).unwrap().status is BookingStatus.CONFIRMED
        assert services.bookings.cancel_booking(booking.id).unwrap().status is BookingStatus.CANCELLED

    def test_reject(self, services, booking):
        assert services.bookings.reject_booking(booking.id).unwrap().status is BookingStatus.REJECTED

    def test_terminal_booking_cannot_move(self, services, booking):
        services.bookings.cancel_booking(booking.id).unwrap()
        result = services.bookings.confirm_booking(booking.id)
        assert result.error_code == ErrorCode.INVALID_STATE
        assert services.bookings.get_booking(booking.id).unwrap().status is BookingStatus.CANCELLED

    def test_in_progress_cannot_be_cancelled(self, services, booking):
        services.bookings.update_status(booking.id, "IN_PROGRESS").unwrap()
        assert services.bookings.cancel_booking(booking.id).error_code == ErrorCode.INVALID_STATE

    def test_update_status_overrides_the_table(self, services, booking):
        services.bookings.cancel_booking(booking.id).unwrap()
        restored = services.bookings.update_status(booking.id, "requested").unwrap()
        assert restored.status is BookingStatus.REQUESTED

    def test_update_status_rejects_unknown_status(self, services, booking):
        assert services.bookings.update_status(booking.id, "PAUSED").error_code == ErrorCode.VALIDATION_ERROR


class TestPatch:
    def test_only_sent_fields_change(self, services, booking):
        patched = services.bookings.update_booking(
            booking.id, {"start_time": time(8, 30), "custom_price": Decimal("550")}
        ).unwrap()
        assert patched.start_time == time(8, 30)
        assert patched.end_time == time(10, 0)
        assert patched.custom_price == Decimal("550")
        assert patched.price_at_booking == Decimal("500")

    def test_nullable_fields_can_be_cleared(self, services, booking):
        services.bookings.update_booking(booking.id, {"custom_price": Decimal("550"), "start_otp": "4321"}).unwrap()
        patched = services.bookings.update_booking(booking.id, {"custom_price": None, "start_otp": None}).unwrap()
        assert patched.custom_price is None
        assert patched.start_otp is None

    def test_fields_outside_the_allow_list_are_rejected(self, services, booking):
        result = services.bookings.update_booking(booking.id, {"price_at_booking": Decimal("1")})
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert services.bookings.get_booking(booking.id).unwrap().price_at_booking == Decimal("500")

    def test_required_fields_cannot_be_nulled(self, services, booking):
        result = services.bookings.update_booking(booking.id, {"date": None})
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_schedule_stays_consistent(self, services, booking):
        result = services.bookings.update_booking(booking.id, {"end_time": time(9, 0)})
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert services.bookings.get_booking(booking.id).unwrap().end_time == time(10, 0)

    def test_malformed_otp_is_rejected(self, services, booking):
        result = services.bookings.update_booking(booking.id, {"start_otp": "12345"})
        assert result.error_code == ErrorCode.VALIDATION_ERROR
