"""
External integrations: phone verification.
"""

from sevaconnect.services.integrations.verification_provider import (
    TwilioVerifyProvider,
    VerificationProvider,
    VerificationResult,
)

__all__ = [
    "TwilioVerifyProvider",
    "VerificationProvider",
    "VerificationResult",
]
