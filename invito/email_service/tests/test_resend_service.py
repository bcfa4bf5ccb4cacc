import json
from types import SimpleNamespace

import httpx
import pytest

from invito.email_service.resend_service import RESEND_EMAILS_URL, ResendEmailService


@pytest.fixture
def config():
    return SimpleNamespace(resend_api_key="re_test_key", emails_from="Invito <hello@invito.app>")


@pytest.fixture
def requests():
    return []


@pytest.fixture
def service(config, requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"id": "email_123"})

    return ResendEmailService(config=config, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_invitation_posts_to_resend(service, requests):
    await service.send_invitation(
        to_address="ana@example.com",
        guest_name="Ana",
        event_title="Launch Party",
        event_date="25 December 2026, 19:00 UTC",
        event_location="Lisbon",
        rsvp_url="https://invito.app/guest/K7Q2ZD",
        invite_code="K7Q2ZD",
        response_deadline="20 December 2026, 23:59 UTC",
    )

    assert len(requests) == 1
    request = requests[0]
    assert str(request.url) == RESEND_EMAILS_URL
    assert request.headers["Authorization"] == "Bearer re_test_key"
    body = json.loads(request.content)
    assert body["from"] == "Invito <hello@invito.app>"
    assert body["to"] == ["ana@example.com"]
    assert body["subject"] == "Invitation: Launch Party"
    assert "K7Q2ZD" in body["text"]
    assert "Please respond by 20 December 2026, 23:59 UTC." in body["html"]


@pytest.mark.asyncio
async def test_send_cancellation(service, requests):
    await service.send_cancellation(
        to_address="ana@example.com",
        guest_name="Ana",
        event_title="Launch Party",
        event_date="25 December 2026, 19:00 UTC",
        event_location="Lisbon",
    )

    body = json.loads(requests[0].content)
    assert body["subject"] == "Invitation cancelled: Launch Party"


@pytest.mark.asyncio
async def test_provider_error_is_raised(config):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "internal error"})

    service = ResendEmailService(config=config, transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.HTTPStatusError):
        await service.send_rsvp_confirmation(
            to_address="ana@example.com",
            guest_name="Ana",
            event_title="Launch Party",
            status="YES",
            event_date="25 December 2026, 19:00 UTC",
            event_location="Lisbon",
        )
