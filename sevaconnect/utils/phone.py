"""
Phone number helpers.
"""

import re

from sevaconnect.core.exceptions import ValidationError

DEFAULT_COUNTRY_CODE = "91"


def format_phone_e164(phone: str, default_country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Normalize a phone number to E.164 format.

    A number already starting with ``+`` keeps its country code. Ten-digit
    local numbers get ``default_country_code``; anything else (e.g. twelve
    digits already carrying the country code) just gets the ``+``.
    """
    if not isinstance(phone, str) or not phone.strip():
        raise ValidationError("Phone number cannot be empty", field="phone")

    cleaned = phone.strip()
    digits = re.sub(r'\D', '', cleaned)

    if not digits:
        raise ValidationError(f"Invalid phone number format: {phone}", field="phone")

    if not cleaned.startswith('+') and len(digits) == 10:
        return f'+{default_country_code}{digits}'

    return '+' + digits
