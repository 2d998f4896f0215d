from urllib.parse import parse_qs

import httpx
import pytest

from sevaconnect.core.config import VerificationSettings
from sevaconnect.services.integrations import TwilioVerifyProvider


@pytest.fixture
def twilio_settings():
    return VerificationSettings(
        TWILIO_ACCOUNT_SID="AC123",
        TWILIO_AUTH_TOKEN="auth-token",
        TWILIO_VERIFY_SERVICE_SID="VA456",
        TWILIO_DEMO_PHONE=None,
    )


class Recorder:
    """MockTransport handler returning queued responses and keeping the requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def form(self, index=0):
        return {k: v[0] for k, v in parse_qs(self.requests[index].content.decode()).items()}


def _provider(settings, recorder, bypass_code="1234"):
    client = httpx.Client(transport=httpx.MockTransport(recorder))
    return TwilioVerifyProvider(settings, bypass_code=bypass_code, client=client)


def test_send_posts_to_verifications(twilio_settings):
    recorder = Recorder(httpx.Response(201, json={"status": "pending"}))
    result = _provider(twilio_settings, recorder).send("+919000000005")

    assert result.ok and result.status == "pending"
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://verify.twilio.com/v2/Services/VA456/Verifications"
    assert request.headers["authorization"].startswith("Basic ")
    assert recorder.form() == {"To": "+919000000005", "Channel": "sms"}


def test_demo_phone_receives_every_code(twilio_settings):
    settings = twilio_settings.model_copy(update={"TWILIO_DEMO_PHONE": "+15550000000"})
    recorder = Recorder(httpx.Response(201, json={"status": "pending"}))
    _provider(settings, recorder).send("+919000000005")
    assert recorder.form()["To"] == "+15550000000"


def test_send_error_is_unavailable(twilio_settings):
    recorder = Recorder(httpx.Response(400, json={"message": "Invalid parameter: To"}))
    result = _provider(twilio_settings, recorder).send("+919000000005")
    assert not result.ok
    assert result.unavailable
    assert result.error == "Invalid parameter: To"


def test_network_failure_is_unavailable(twilio_settings):
    recorder = Recorder(httpx.ConnectError("connection refused"))
    result = _provider(twilio_settings, recorder).send("+919000000005")
    assert not result.ok and result.unavailable


def test_unconfigured_provider_makes_no_request():
    recorder = Recorder()
    provider = _provider(VerificationSettings(TWILIO_ACCOUNT_SID=None), recorder)
    result = provider.send("+919000000005")
    assert result.unavailable
    assert recorder.requests == []


def test_check_approved(twilio_settings):
    recorder = Recorder(httpx.Response(200, json={"status": "approved"}))
    result = _provider(twilio_settings, recorder).check("+919000000005", "654321")

    assert result.ok
    assert str(recorder.requests[0].url).endswith("/Services/VA456/VerificationCheck")
    assert recorder.form() == {"To": "+919000000005", "Code": "654321"}


def test_check_wrong_code_is_not_an_outage(twilio_settings):
    recorder = Recorder(httpx.Response(200, json={"status": "pending"}))
    result = _provider(twilio_settings, recorder).check("+919000000005", "000000")
    assert not result.ok
    assert not result.unavailable
    assert result.error == "The code you entered is incorrect or expired."


def test_check_server_error_is_unavailable(twilio_settings):
    recorder = Recorder(httpx.Response(503, text="unavailable"))
    result = _provider(twilio_settings, recorder).check("+919000000005", "000000")
    assert result.unavailable


def test_bypass_code_skips_the_provider(twilio_settings):
    recorder = Recorder()
    result = _provider(twilio_settings, recorder).check("+919000000005", "1234")
    assert result.ok and result.status == "approved"
    assert recorder.requests == []
