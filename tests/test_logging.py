import logging

from sevaconnect.core.logging import RedactingFilter, sanitize


def test_sanitize_redacts_nested_sensitive_keys():
    data = {"user": "u-1", "password": "x", "meta": {"start_otp": "1234", "phase": "start"}}
    sanitize(data)
    assert data["user"] == "u-1"
    assert data["password"] == "[REDACTED]"
    assert data["meta"] == {"start_otp": "[REDACTED]", "phase": "start"}


def test_redacting_filter_masks_extra_fields():
    record = logging.LogRecord("sevaconnect", logging.INFO, __file__, 1, "login", (), None)
    record.auth_token = "abc"
    record.booking_id = "bk-1"
    assert RedactingFilter().filter(record)
    assert record.auth_token == "[REDACTED]"
    assert record.booking_id == "bk-1"
