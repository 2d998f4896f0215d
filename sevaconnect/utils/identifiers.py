"""
Identifier and one-time code generation.
"""

import time
import secrets
import uuid

OTP_MIN = 1000
OTP_MAX = 9999

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    chars = []
    while value:
        value, rem = divmod(value, 36)
        chars.append(_BASE36[rem])
    return "".join(reversed(chars))


def new_id(prefix: str) -> str:
    """
    Generate a prefixed identifier such as ``bk-1f3a9c2e-lq9x8k2a``.

    The random segment is the first group of a uuid4; the suffix is the
    current epoch time in milliseconds, base36 encoded.
    """
    random_part = uuid.uuid4().hex[:8]
    millis = int(time.time() * 1000)
    return f"{prefix}-{random_part}-{_to_base36(millis)}"


def generate_otp() -> str:
    """Return a uniformly random four digit code in ``[1000, 9999]``."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class IdPrefix:
    USER = "u"
    SOCIETY = "soc"
    SERVICE = "srv"
    SOCIETY_SERVICE = "ss"
    BOOKING = "bk"
    MESSAGE = "msg"
    REVIEW = "rv"
