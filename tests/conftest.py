"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database through the same
``Application`` container used in production, with a fake verification
provider in place of Twilio.
"""

from datetime import date, time, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

import pytest

from sevaconnect.application import Application
from sevaconnect.core.config import (
    DatabaseSettings,
    LoggingSettings,
    OtpSettings,
    SecuritySettings,
    Settings,
    VerificationSettings,
)
from sevaconnect.services.integrations import VerificationProvider, VerificationResult

MASTER_OTP = "1234"
VALID_SMS_CODE = "654321"


class FakeVerificationProvider(VerificationProvider):
    """Records calls and accepts ``VALID_SMS_CODE`` or the bypass code."""

    def __init__(self, bypass_code: Optional[str] = MASTER_OTP):
        super().__init__(bypass_code)
        self.sent: List[str] = []
        self.checked: List[Tuple[str, str]] = []
        self.available = True

    def send(self, phone_e164: str) -> VerificationResult:
        self.sent.append(phone_e164)
        if not self.available:
            return VerificationResult(False, "provider down", unavailable=True)
        return VerificationResult(True, status="pending")

    def check(self, phone_e164: str, code: str) -> VerificationResult:
        self.checked.append((phone_e164, code))
        if self.is_bypass(code) or code == VALID_SMS_CODE:
            return VerificationResult(True, status="approved")
        if not self.available:
            return VerificationResult(False, "provider down", unavailable=True)
        return VerificationResult(False, "The code you entered is incorrect or expired.")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="testing",
        database=DatabaseSettings(DATABASE_URL="sqlite://"),
        security=SecuritySettings(
            JWT_SECRET="test-secret-key-for-access-tokens-0123",
            PASSWORD_BCRYPT_ROUNDS=4,
        ),
        otp=OtpSettings(MASTER_OTP=MASTER_OTP),
        verification=VerificationSettings(DEFAULT_COUNTRY_CODE="91"),
        logging=LoggingSettings(LOG_LEVEL="DEBUG", LOG_FORMAT="text"),
    )


@pytest.fixture
def verification() -> FakeVerificationProvider:
    return FakeVerificationProvider()


@pytest.fixture
def app(settings, verification):
    application = Application(settings, verification_provider=verification)
    application.startup(configure_logging=False)
    yield application
    application.close()


@pytest.fixture
def services(app):
    with app.unit_of_work() as registry:
        yield registry


# ---------------------------------------------------------------------------
# Domain data
# ---------------------------------------------------------------------------


@pytest.fixture
def society(services):
    return services.societies.create_society({
        "name": "Green Park",
        "address": "12 Ring Road",
        "code": "GP01",
        "phone": "9000000001",
    }).unwrap()


def register(services, society_id: str, name: str, phone: str, role: str, **extra):
    payload = {
        "name": name,
        "phone": phone,
        "password": "secret1",
        "role": role,
        "society_id": society_id,
        "otp": MASTER_OTP,
    }
    payload.update(extra)
    return services.auth.register(payload).unwrap()


@pytest.fixture
def household(services, society):
    return register(
        services, society.society_id, "Asha Rao", "9000000002", "HOUSEHOLD", address="Flat 4B",
    )


@pytest.fixture
def maid(services, society):
    return register(
        services, society.society_id, "Meena Devi", "9000000003", "MAID", skills=["cleaning", "cooking"],
    )


@pytest.fixture
def cleaning(services):
    return services.catalogue.create_service({
        "name": "Cleaning",
        "description": "Full home cleaning",
        "base_price": Decimal("500"),
        "duration_minutes": 60,
        "icon": "broom",
    }).unwrap()


@pytest.fixture
def offering(services, society, cleaning):
    return services.offerings.create_offering({
        "society_id": society.society_id,
        "service_id": cleaning.id,
    }).unwrap()


@pytest.fixture
def booking_date() -> date:
    return date.today() + timedelta(days=1)


@pytest.fixture
def booking_payload(offering, household, maid, booking_date):
    return {
        "society_service_id": offering.id,
        "household_id": household.id,
        "maid_id": maid.id,
        "date": booking_date,
        "start_time": time(9, 0),
        "end_time": time(10, 0),
    }


@pytest.fixture
def booking(services, booking_payload):
    return services.bookings.create_booking(booking_payload).unwrap()
