from decimal import Decimal

import pytest

from sevaconnect.core.exceptions import DataIntegrityError
from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.services.catalogue import resolve_offering


@pytest.fixture
def catalogue_entry():
    return Service(
        id="srv-1",
        name=LocalizedString.parse({"en": "Cleaning", "hi": "सफाई"}),
        description=LocalizedString.parse("Full home cleaning"),
        base_price=Decimal("500"),
        duration_minutes=60,
        icon="broom",
        is_generic=True,
        is_active=True,
    )


def test_linked_offering_inherits_everything(catalogue_entry):
    offering = SocietyService(id="ss-1", society_id="soc-1", service_id="srv-1", is_active=True)
    view = resolve_offering(offering, catalogue_entry)

    assert view.name == {"en": "Cleaning", "hi": "सफाई"}
    assert view.effective_price == Decimal("500")
    assert view.base_price == Decimal("500")
    assert view.price_override is None
    assert view.duration_minutes == 60
    assert view.icon == "broom"
    assert view.is_generic is True
    assert view.is_exclusive is False


def test_overrides_win_field_by_field(catalogue_entry):
    offering = SocietyService(
        id="ss-1",
        society_id="soc-1",
        service_id="srv-1",
        price=Decimal("600"),
        icon="sparkle",
        is_generic=False,
        is_active=True,
    )
    view = resolve_offering(offering, catalogue_entry)

    assert view.effective_price == Decimal("600")
    assert view.base_price == Decimal("500")
    assert view.price_override == Decimal("600")
    assert view.icon == "sparkle"
    assert view.is_generic is False
    assert view.name.text() == "Cleaning"
    assert view.duration_minutes == 60


def test_exclusive_offering_has_no_base_price():
    offering = SocietyService(
        id="ss-2",
        society_id="soc-1",
        service_id=None,
        name=LocalizedString.parse("Car wash"),
        price=Decimal("300"),
        duration=45,
        icon="car",
        is_active=True,
    )
    view = resolve_offering(offering, None)

    assert view.is_exclusive is True
    assert view.base_price is None
    assert view.effective_price == Decimal("300")
    assert view.description == {"en": ""}
    assert view.is_generic is False


def test_missing_price_on_both_sides_is_an_integrity_error():
    offering = SocietyService(id="ss-3", society_id="soc-1", service_id=None, is_active=True)
    with pytest.raises(DataIntegrityError):
        resolve_offering(offering, None)
