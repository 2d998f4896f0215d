from datetime import date

import pytest

from sevaconnect.services.base import ErrorCode


def _review(booking, rating, **extra):
    payload = {
        "booking_id": booking.id,
        "maid_id": booking.maid_id,
        "household_id": booking.household_id,
        "rating": rating,
        "comment": "Good work",
    }
    payload.update(extra)
    return payload


def test_review_marks_booking_reviewed(services, booking, household):
    review = services.reviews.add_review(_review(booking, 5), review_date=date(2024, 5, 1)).unwrap()

    assert review.id.startswith("rv-")
    assert review.household_name == household.name
    assert review.date == date(2024, 5, 1)
    assert services.bookings.get_booking(booking.id).unwrap().is_reviewed is True


def test_supplied_household_name_is_kept(services, booking):
    review = services.reviews.add_review(_review(booking, 4, household_name="Flat 4B")).unwrap()
    assert review.household_name == "Flat 4B"


def test_second_review_is_a_conflict(services, booking):
    services.reviews.add_review(_review(booking, 5)).unwrap()
    result = services.reviews.add_review(_review(booking, 1))

    assert result.error_code == ErrorCode.CONFLICT
    assert len(services.reviews.list_reviews_for_maid(booking.maid_id).unwrap()) == 1


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_must_be_between_one_and_five(services, booking, rating):
    result = services.reviews.add_review(_review(booking, rating))
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert services.bookings.get_booking(booking.id).unwrap().is_reviewed is False


def test_review_and_flag_are_atomic(services, booking, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(services.reviews.booking_repository, "update", fail)
    result = services.reviews.add_review(_review(booking, 5))

    assert result.error_code == ErrorCode.INTERNAL_ERROR
    assert services.reviews.list_reviews_for_maid(booking.maid_id).unwrap() == []
    assert services.bookings.get_booking(booking.id).unwrap().is_reviewed is False


def test_rating_summary(services, booking_payload, maid):
    ratings = [5, 4, 4]
    for day, rating in enumerate(ratings, start=1):
        created = services.bookings.create_booking(booking_payload).unwrap()
        services.reviews.add_review(_review(created, rating), review_date=date(2024, 5, day)).unwrap()

    summary = services.reviews.get_rating_summary(maid.id).unwrap()
    assert summary.review_count == 3
    assert summary.average_rating == 4.3

    listed = services.reviews.list_reviews_for_maid(maid.id).unwrap()
    assert [r.date for r in listed] == [date(2024, 5, 3), date(2024, 5, 2), date(2024, 5, 1)]

    profile = services.users.get_user(maid.id).unwrap()
    assert profile.rating == 4.3
    assert profile.review_count == 3


def test_rating_summary_without_reviews(services, maid):
    summary = services.reviews.get_rating_summary(maid.id).unwrap()
    assert summary.review_count == 0
    assert summary.average_rating == 0.0
