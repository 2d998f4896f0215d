import pytest

from sevaconnect.models.base.enums import UserRole
from sevaconnect.services.auth.auth_service import DUPLICATE_PHONE_MESSAGE, INVALID_CREDENTIALS_MESSAGE
from sevaconnect.services.base import ErrorCode

from tests.conftest import VALID_SMS_CODE


@pytest.fixture
def registration(society):
    return {
        "name": "Lakshmi",
        "phone": "9000000005",
        "role": "MAID",
        "society_id": society.society_id,
    }


class TestRegistration:
    def test_start_sends_code_to_e164_number(self, services, verification, registration):
        started = services.auth.start_registration(registration).unwrap()
        assert started["phone"] == "+919000000005"
        assert verification.sent == ["+919000000005"]

    def test_duplicate_phone_is_rejected_before_sending(self, services, verification, registration, household):
        result = services.auth.start_registration({**registration, "phone": household.phone})
        assert result.error_code == ErrorCode.CONFLICT
        assert result.message == DUPLICATE_PHONE_MESSAGE
        assert verification.sent == []

    def test_admin_roles_cannot_self_register(self, services, verification, registration):
        result = services.auth.start_registration({**registration, "role": "SOCIETY_ADMIN"})
        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert verification.sent == []

    def test_unknown_society_is_not_found(self, services, registration):
        result = services.auth.start_registration({**registration, "society_id": "soc-missing"})
        assert result.error_code == ErrorCode.NOT_FOUND

    def test_provider_outage_is_an_external_error(self, services, verification, registration):
        verification.available = False
        result = services.auth.start_registration(registration)
        assert result.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR

    def test_register_creates_unverified_account(self, services, verification, registration):
        user = services.auth.register({**registration, "password": "secret1", "otp": VALID_SMS_CODE}).unwrap()
        assert user.role is UserRole.MAID
        assert user.username == "9000000005"
        assert user.phone == "9000000005"
        assert user.is_verified is False
        assert verification.checked == [("+919000000005", VALID_SMS_CODE)]

    def test_wrong_code_creates_nothing(self, services, registration):
        result = services.auth.register({**registration, "password": "secret1", "otp": "000000"})
        assert result.error_code == ErrorCode.AUTHENTICATION_FAILED
        assert services.auth.login({"identifier": "9000000005", "password": "secret1"}).error_code == (
            ErrorCode.AUTHENTICATION_FAILED
        )

    def test_provider_outage_on_check(self, services, verification, registration):
        verification.available = False
        result = services.auth.register({**registration, "password": "secret1", "otp": "000000"})
        assert result.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR

    def test_register_twice_is_a_conflict(self, services, registration):
        payload = {**registration, "password": "secret1", "otp": VALID_SMS_CODE}
        services.auth.register(payload).unwrap()
        assert services.auth.register(payload).error_code == ErrorCode.CONFLICT

    def test_short_password_is_rejected(self, services, registration):
        result = services.auth.register({**registration, "password": "abc", "otp": VALID_SMS_CODE})
        assert result.error_code == ErrorCode.VALIDATION_ERROR


class TestLogin:
    def test_login_with_phone(self, app, services, household):
        login = services.auth.login({"identifier": household.phone, "password": "secret1"}).unwrap()
        assert login.user.id == household.id
        claims = app.jwt_manager.decode_token(login.token)
        assert claims["id"] == household.id
        assert claims["role"] == "HOUSEHOLD"

    def test_wrong_password(self, services, household):
        result = services.auth.login({"identifier": household.phone, "password": "nope"})
        assert result.error_code == ErrorCode.AUTHENTICATION_FAILED
        assert result.message == INVALID_CREDENTIALS_MESSAGE

    def test_unknown_user_gets_the_same_message(self, services):
        result = services.auth.login({"identifier": "nobody", "password": "nope"})
        assert result.message == INVALID_CREDENTIALS_MESSAGE

    def test_society_admin_logs_in_with_initial_password(self, services, society):
        login = services.auth.login({"identifier": "9000000001", "password": society.initial_password}).unwrap()
        assert login.user.role is UserRole.SOCIETY_ADMIN
        assert login.user.must_change_password is True


class TestPasswordReset:
    def test_full_reset_flow(self, services, verification, household):
        assert services.auth.start_password_reset({"identifier": household.phone}).unwrap() is True
        assert verification.sent == ["+919000000002"]

        login = services.auth.complete_password_reset(
            {"identifier": household.phone, "otp": VALID_SMS_CODE}
        ).unwrap()
        assert login.user.must_change_password is True

        changed = services.auth.change_password(household.id, "newsecret").unwrap()
        assert changed.must_change_password is False
        assert services.auth.login({"identifier": household.phone, "password": "newsecret"}).is_success
        assert not services.auth.login({"identifier": household.phone, "password": "secret1"}).is_success

    def test_unknown_account(self, services):
        result = services.auth.start_password_reset({"identifier": "9999999999"})
        assert result.error_code == ErrorCode.NOT_FOUND

    def test_wrong_reset_code(self, services, household):
        result = services.auth.complete_password_reset({"identifier": household.phone, "otp": "000000"})
        assert result.error_code == ErrorCode.AUTHENTICATION_FAILED
        assert services.users.get_user(household.id).unwrap().must_change_password is False

    def test_new_password_too_short(self, services, household):
        result = services.auth.change_password(household.id, "abc")
        assert result.error_code == ErrorCode.VALIDATION_ERROR
