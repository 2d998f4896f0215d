"""
Phone verification provider.

Registration and password reset confirm a phone number by sending it a code
through an external provider and checking the code the user types back.
The configured bypass code is accepted without contacting the provider.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from sevaconnect.core.config import VerificationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of a provider call.

    ``unavailable`` marks failures of the provider itself (network, HTTP
    5xx, missing configuration) as opposed to a rejected code.
    """

    ok: bool
    error: Optional[str] = None
    status: Optional[str] = None
    unavailable: bool = False


class VerificationProvider(ABC):
    """Send and check one-time phone verification codes."""

    def __init__(self, bypass_code: Optional[str] = None):
        self.bypass_code = bypass_code

    @abstractmethod
    def send(self, phone_e164: str) -> VerificationResult:
        """Send a verification code to ``phone_e164``."""

    @abstractmethod
    def check(self, phone_e164: str, code: str) -> VerificationResult:
        """Check ``code`` for ``phone_e164``."""

    def is_bypass(self, code: Optional[str]) -> bool:
        return bool(self.bypass_code) and code == self.bypass_code


class TwilioVerifyProvider(VerificationProvider):
    """
    Twilio Verify over its REST API.

    When ``TWILIO_DEMO_PHONE`` is set every code goes to that number, which
    keeps demo deployments from texting real users.
    """

    def __init__(
        self,
        settings: VerificationSettings,
        bypass_code: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(bypass_code)
        self.settings = settings
        self._client = client or httpx.Client(timeout=settings.VERIFICATION_TIMEOUT_SECONDS)

    @property
    def _service_url(self) -> str:
        return f"{self.settings.TWILIO_BASE_URL}/Services/{self.settings.TWILIO_VERIFY_SERVICE_SID}"

    def _target(self, phone_e164: str) -> str:
        return self.settings.TWILIO_DEMO_PHONE or phone_e164

    def _post(self, endpoint: str, data: dict) -> httpx.Response:
        return self._client.post(
            f"{self._service_url}/{endpoint}",
            data=data,
            auth=(self.settings.TWILIO_ACCOUNT_SID, self.settings.TWILIO_AUTH_TOKEN),
            timeout=self.settings.VERIFICATION_TIMEOUT_SECONDS,
        )

    def send(self, phone_e164: str) -> VerificationResult:
        if not self.settings.is_configured:
            logger.error("Twilio Verify is not configured")
            return VerificationResult(False, "Verification provider is not configured", unavailable=True)

        target = self._target(phone_e164)
        try:
            response = self._post("Verifications", {"To": target, "Channel": "sms"})
            data = _json(response)
        except httpx.HTTPError as e:
            logger.error(f"Twilio Verify request failed: {e}")
            return VerificationResult(False, "Verification provider request failed", unavailable=True)

        if response.is_success:
            logger.info(f"Verification sent to {target}. Status: {data.get('status')}")
            return VerificationResult(True, status=data.get("status"))

        message = data.get("message") or f"Verification provider returned {response.status_code}"
        logger.error(f"Twilio Verify error: {message}")
        return VerificationResult(False, message, unavailable=True)

    def check(self, phone_e164: str, code: str) -> VerificationResult:
        if self.is_bypass(code):
            logger.info("Bypass verification code accepted")
            return VerificationResult(True, status="approved")

        if not self.settings.is_configured:
            logger.error("Twilio Verify is not configured")
            return VerificationResult(False, "Verification provider is not configured", unavailable=True)

        target = self._target(phone_e164)
        try:
            response = self._post("VerificationCheck", {"To": target, "Code": code})
            data = _json(response)
        except httpx.HTTPError as e:
            logger.error(f"Twilio Verify request failed: {e}")
            return VerificationResult(False, "Verification provider request failed", unavailable=True)

        if response.is_success and data.get("status") == "approved":
            logger.info(f"Code verified for {target}")
            return VerificationResult(True, status="approved")

        if response.status_code >= 500:
            return VerificationResult(False, "Verification provider request failed", unavailable=True)

        return VerificationResult(
            False,
            data.get("message") or "The code you entered is incorrect or expired.",
            status=data.get("status"),
        )

    def close(self) -> None:
        self._client.close()


def _json(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
