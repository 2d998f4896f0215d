import re

import pytest

from sevaconnect.core.exceptions import TokenError, ValidationError
from sevaconnect.core.security import JWTManager, PasswordHasher
from sevaconnect.utils.identifiers import IdPrefix, OTP_MAX, OTP_MIN, generate_otp, new_id
from sevaconnect.utils.phone import format_phone_e164


class TestIdentifiers:
    def test_new_id_shape(self):
        value = new_id(IdPrefix.BOOKING)
        assert re.fullmatch(r"bk-[0-9a-f]{8}-[0-9a-z]+", value)

    def test_new_ids_are_unique(self):
        assert len({new_id(IdPrefix.USER) for _ in range(200)}) == 200

    def test_generate_otp_is_four_digits_in_range(self):
        for _ in range(500):
            code = generate_otp()
            assert len(code) == 4
            assert OTP_MIN <= int(code) <= OTP_MAX


class TestPhone:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("9876543210", "+919876543210"),
            ("98765 43210", "+919876543210"),
            ("+1 415 555 0100", "+14155550100"),
            ("919876543210", "+919876543210"),
        ],
    )
    def test_format_phone_e164(self, raw, expected):
        assert format_phone_e164(raw) == expected

    def test_default_country_code_is_configurable(self):
        assert format_phone_e164("4155550100", "1") == "+14155550100"

    @pytest.mark.parametrize("raw", ["", "   ", "abc"])
    def test_invalid_numbers_raise(self, raw):
        with pytest.raises(ValidationError):
            format_phone_e164(raw)


class TestSecurity:
    def test_password_hash_round_trip(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("secret1")
        assert hashed != "secret1"
        assert hasher.verify("secret1", hashed)
        assert not hasher.verify("secret2", hashed)

    def test_initial_password_length(self):
        assert len(PasswordHasher.generate_initial_password(10)) == 10

    def test_token_carries_user_and_role(self):
        manager = JWTManager(secret_key="test-secret-key-for-access-tokens-0123")
        claims = manager.decode_token(manager.create_access_token("u-1", role="MAID"))
        assert claims["id"] == "u-1"
        assert claims["role"] == "MAID"

    def test_tampered_token_is_rejected(self):
        manager = JWTManager(secret_key="test-secret-key-for-access-tokens-0123")
        other = JWTManager(secret_key="another-secret-key-for-access-tokens-99")
        with pytest.raises(TokenError):
            manager.decode_token(other.create_access_token("u-1"))
