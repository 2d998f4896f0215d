from datetime import datetime, timezone

from sevaconnect.models.communication.message import ChatMessage
from sevaconnect.services.base import ErrorCode


def _send(services, booking, sender, text):
    return services.messages.send_message({
        "booking_id": booking.id,
        "sender_id": sender.id,
        "sender_name": sender.name,
        "text": text,
    }).unwrap()


def test_send_and_list_oldest_first(services, booking, household, maid):
    first = _send(services, booking, household, "Please come at 9")
    second = _send(services, booking, maid, "On my way")
    third = _send(services, booking, household, "Thanks")

    stamps = {
        first.id: datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
        second.id: datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc),
        third.id: datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
    }
    for message_id, stamp in stamps.items():
        services.session.get(ChatMessage, message_id).timestamp = stamp
    services.session.commit()

    listed = services.messages.list_messages(booking.id).unwrap()
    assert [m.text for m in listed] == ["On my way", "Please come at 9", "Thanks"]
    assert listed[0].sender_name == maid.name


def test_blank_text_is_rejected(services, booking, household):
    result = services.messages.send_message({
        "booking_id": booking.id,
        "sender_id": household.id,
        "sender_name": household.name,
        "text": "   ",
    })
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert services.messages.list_messages(booking.id).unwrap() == []


def test_message_for_unknown_booking_is_not_found(services, household):
    result = services.messages.send_message({
        "booking_id": "bk-missing",
        "sender_id": household.id,
        "sender_name": household.name,
        "text": "Hello",
    })
    assert result.error_code == ErrorCode.NOT_FOUND


def test_counts_include_every_requested_id(services, booking, booking_payload, household):
    other = services.bookings.create_booking(booking_payload).unwrap()
    _send(services, booking, household, "one")
    _send(services, booking, household, "two")

    counts = services.messages.get_message_counts([booking.id, other.id, "bk-missing", booking.id, ""]).unwrap()
    assert counts == {booking.id: 2, other.id: 0, "bk-missing": 0}


def test_counts_for_no_ids(services):
    assert services.messages.get_message_counts([]).unwrap() == {}
