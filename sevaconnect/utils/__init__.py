from sevaconnect.utils.identifiers import IdPrefix, generate_otp, new_id
from sevaconnect.utils.phone import format_phone_e164

__all__ = ["IdPrefix", "generate_otp", "new_id", "format_phone_e164"]
