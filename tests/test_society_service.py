from datetime import date, timedelta

from sevaconnect.models.base.enums import UserRole
from sevaconnect.services.base import ErrorCode


def test_create_society_with_admin(services, society):
    assert len(society.initial_password) == 8

    created = services.societies.get_society(society.society_id).unwrap()
    assert created.code == "GP01"

    admin = services.users.get_user(society.admin_id).unwrap()
    assert admin.role is UserRole.SOCIETY_ADMIN
    assert admin.society_id == society.society_id
    assert admin.username == "9000000001"
    assert admin.name == "Green Park Admin"
    assert admin.is_verified is True
    assert admin.must_change_password is True


def test_duplicate_code_is_a_conflict(services, society):
    result = services.societies.create_society({
        "name": "Blue Park", "address": "1 Lake Road", "code": "GP01", "phone": "9000000100",
    })
    assert result.error_code == ErrorCode.CONFLICT
    assert result.message == "A society with this code already exists."


def test_duplicate_admin_phone_is_a_conflict(services, society):
    result = services.societies.create_society({
        "name": "Blue Park", "address": "1 Lake Road", "code": "BP01", "phone": "9000000001",
    })
    assert result.error_code == ErrorCode.CONFLICT
    assert len(services.societies.list_societies().unwrap()) == 1


def test_failed_creation_leaves_no_admin(services, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(services.societies.repository, "create", fail)
    result = services.societies.create_society({
        "name": "Blue Park", "address": "1 Lake Road", "code": "BP01", "phone": "9000000100",
    })

    assert result.error_code == ErrorCode.INTERNAL_ERROR
    assert services.auth.login({"identifier": "9000000100", "password": "whatever"}).error_code == (
        ErrorCode.AUTHENTICATION_FAILED
    )
    assert services.societies.user_repository.find_by_identifier("9000000100") is None


def test_explicit_initial_password(services):
    created = services.societies.create_society({
        "name": "Blue Park", "address": "1 Lake Road", "code": "BP01", "phone": "9000000100",
        "initial_password": "welcome1",
    }).unwrap()
    assert created.initial_password == "welcome1"
    assert services.auth.login({"identifier": "9000000100", "password": "welcome1"}).is_success


def test_society_stats(services, society, booking, maid, booking_date):
    stats = services.societies.get_society_stats(society.society_id, booking_date).unwrap()
    assert stats.total_users == 2
    assert stats.pending_verifications == 2
    assert stats.active_bookings_today == 0

    services.users.verify_user(maid.id).unwrap()
    services.bookings.confirm_booking(booking.id).unwrap()

    stats = services.societies.get_society_stats(society.society_id, booking_date).unwrap()
    assert stats.pending_verifications == 1
    assert stats.active_bookings_today == 1
    assert services.societies.get_society_stats(
        society.society_id, booking_date + timedelta(days=1)
    ).unwrap().active_bookings_today == 0


def test_list_societies_with_stats(services, society, booking, booking_date):
    services.societies.create_society({
        "name": "Avalon", "address": "2 Hill Road", "code": "AV01", "phone": "9000000100",
    }).unwrap()

    listed = services.societies.list_societies_with_stats(booking_date, booking_date + timedelta(days=6)).unwrap()
    assert [s.name for s in listed] == ["Avalon", "Green Park"]
    green = listed[1]
    assert (green.household_count, green.maid_count, green.expected_bookings) == (1, 1, 1)
    assert (listed[0].household_count, listed[0].maid_count, listed[0].expected_bookings) == (0, 0, 0)

    services.bookings.cancel_booking(booking.id).unwrap()
    listed = services.societies.list_societies_with_stats(booking_date, booking_date).unwrap()
    assert listed[1].expected_bookings == 0


def test_recent_activity(services, society, household, maid):
    activity = services.societies.get_recent_activity(society.society_id, limit=1).unwrap()
    assert len(activity) == 1
    assert activity[0].activity_type == "registration"
    assert activity[0].user_id in {household.id, maid.id}


def test_unknown_society(services):
    assert services.societies.get_society_stats("soc-missing", date.today()).error_code == ErrorCode.NOT_FOUND
