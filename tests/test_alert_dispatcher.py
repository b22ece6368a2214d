"""Tests for the Twilio SMS dispatcher using httpx.MockTransport."""

import base64
from urllib.parse import parse_qs

import httpx
import pytest

from ashwini.core.alert_dispatcher import AlertConfig, AlertDispatcher

_CONFIG = AlertConfig(
    account_sid="AC123",
    auth_token="secret",
    from_number="+15550001111",
    contact="+919800000000",
    api_base="https://sms.test/2010-04-01",
)


def _dispatcher(handler, config=_CONFIG):
    return AlertDispatcher(config, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_successful_send_posts_form_with_basic_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"sid": "SM1", "status": "queued"})

    result = await _dispatcher(handler).dispatch_to_emergency_contact("URGENT MEDICAL ALERT")

    assert result.success is True
    assert result.error is None

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://sms.test/2010-04-01/Accounts/AC123/Messages.json"
    form = parse_qs(request.content.decode())
    assert form == {
        "To": ["+919800000000"],
        "From": ["+15550001111"],
        "Body": ["URGENT MEDICAL ALERT"],
    }
    expected_auth = base64.b64encode(b"AC123:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected_auth}"


@pytest.mark.asyncio
async def test_api_error_message_is_reported():
    def handler(request):
        return httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})

    result = await _dispatcher(handler).dispatch("+1", "hello")

    assert result.success is False
    assert result.error == "Invalid 'To' Phone Number"


@pytest.mark.asyncio
async def test_api_error_without_message_uses_default():
    def handler(request):
        return httpx.Response(500, json={})

    result = await _dispatcher(handler).dispatch("+1", "hello")

    assert result.success is False
    assert result.error == "Failed to send SMS due to an API error."


@pytest.mark.asyncio
async def test_network_error_is_reported_not_raised():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await _dispatcher(handler).dispatch("+1", "hello")

    assert result.success is False
    assert "network error" in result.error


@pytest.mark.asyncio
async def test_unconfigured_dispatcher_sends_nothing():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201)

    config = AlertConfig(account_sid="", auth_token="", from_number="", contact="+1")
    result = await _dispatcher(handler, config).dispatch_to_emergency_contact("hello")

    assert result.success is False
    assert calls == []


@pytest.mark.asyncio
async def test_missing_contact_sends_nothing():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201)

    result = await _dispatcher(handler).dispatch("", "hello")

    assert result.success is False
    assert calls == []
