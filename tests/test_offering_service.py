from datetime import datetime, timezone
from decimal import Decimal

import pytest

from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.services.base import ErrorCode


@pytest.fixture
def car_wash(services, society):
    return services.offerings.create_offering({
        "society_id": society.society_id,
        "name": "Car wash",
        "price": Decimal("300"),
        "duration": 45,
        "icon": "car",
    }).unwrap()


def test_adopting_a_catalogue_service_inherits_its_values(offering, cleaning):
    assert offering.service_id == cleaning.id
    assert offering.effective_price == Decimal("500")
    assert offering.base_price == Decimal("500")
    assert offering.price_override is None
    assert offering.name == {"en": "Cleaning"}
    assert offering.is_exclusive is False
    assert offering.is_active is True


def test_blank_text_on_adoption_inherits_catalogue_text(services, society, cleaning):
    view = services.offerings.create_offering({
        "society_id": society.society_id,
        "service_id": cleaning.id,
        "name": "",
        "description": "  ",
    }).unwrap()

    assert view.name.text() == "Cleaning"
    assert view.description.text() == "Full home cleaning"
    row = services.session.get(SocietyService, view.id)
    assert row.name is None
    assert row.description is None


def test_blank_name_does_not_satisfy_exclusive_offering(services, society):
    result = services.offerings.create_offering({
        "society_id": society.society_id,
        "name": "",
        "price": Decimal("300"),
        "duration": 45,
        "icon": "car",
    })
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "name"


def test_price_override_leaves_catalogue_untouched(services, offering, cleaning):
    view = services.offerings.update_offering(offering.id, {"price": Decimal("600")}).unwrap()
    assert view.effective_price == Decimal("600")
    assert view.base_price == Decimal("500")
    assert services.catalogue.get_service(cleaning.id).unwrap().base_price == Decimal("500")


def test_catalogue_change_flows_through_unless_overridden(services, offering, cleaning):
    services.catalogue.update_service(cleaning.id, {"base_price": Decimal("520"), "icon": "mop"}).unwrap()
    services.offerings.update_offering(offering.id, {"icon": "sparkle"}).unwrap()

    view = services.offerings.get_offering(offering.id).unwrap()
    assert view.effective_price == Decimal("520")
    assert view.icon == "sparkle"


def test_explicit_null_reverts_to_catalogue_value(services, offering):
    services.offerings.update_offering(offering.id, {"price": Decimal("600"), "icon": "sparkle"}).unwrap()
    view = services.offerings.update_offering(offering.id, {"price": None}).unwrap()
    assert view.effective_price == Decimal("500")
    assert view.price_override is None
    assert view.icon == "sparkle"


def test_localized_override(services, offering):
    view = services.offerings.update_offering(
        offering.id, {"name": '{"en": "Deep cleaning", "hi": "गहरी सफाई"}'}
    ).unwrap()
    assert view.name == {"en": "Deep cleaning", "hi": "गहरी सफाई"}


def test_exclusive_offering(car_wash):
    assert car_wash.is_exclusive is True
    assert car_wash.service_id is None
    assert car_wash.base_price is None
    assert car_wash.effective_price == Decimal("300")
    assert car_wash.duration_minutes == 45


def test_exclusive_offering_requires_core_fields(services, society):
    result = services.offerings.create_offering({
        "society_id": society.society_id,
        "name": "Car wash",
        "duration": 45,
    })
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.message.endswith("Missing: price, icon")


def test_exclusive_offering_requires_english_name(services, society):
    result = services.offerings.create_offering({
        "society_id": society.society_id,
        "name": {"hi": "कार धुलाई"},
        "price": Decimal("300"),
        "duration": 45,
        "icon": "car",
    })
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "name"


def test_exclusive_offering_cannot_clear_required_fields(services, car_wash):
    result = services.offerings.update_offering(car_wash.id, {"price": None})
    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert services.offerings.get_offering(car_wash.id).unwrap().effective_price == Decimal("300")


def test_unknown_catalogue_service_is_not_found(services, society):
    result = services.offerings.create_offering({"society_id": society.society_id, "service_id": "srv-missing"})
    assert result.error_code == ErrorCode.NOT_FOUND


def test_unknown_society_is_not_found(services, cleaning):
    result = services.offerings.create_offering({"society_id": "soc-missing", "service_id": cleaning.id})
    assert result.error_code == ErrorCode.NOT_FOUND


def test_unknown_update_field_is_rejected(services, offering):
    result = services.offerings.update_offering(offering.id, {"service_id": "srv-other"})
    assert result.error_code == ErrorCode.VALIDATION_ERROR


def test_soft_delete_keeps_the_row(services, society, offering):
    view = services.offerings.delete_offering(offering.id).unwrap()
    assert view.is_active is False

    assert [o.id for o in services.offerings.list_offerings(society.society_id).unwrap()] == [offering.id]
    assert services.offerings.list_offerings(society.society_id, include_inactive=False).unwrap() == []


def test_offerings_are_listed_in_creation_order(services, society, offering, car_wash):
    services.session.get(SocietyService, offering.id).created_at = datetime(2024, 1, 2, tzinfo=timezone.utc)
    services.session.get(SocietyService, car_wash.id).created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    services.session.commit()

    views = services.offerings.list_offerings(society.society_id).unwrap()
    assert [v.id for v in views] == [car_wash.id, offering.id]
