import logging
from typing import Protocol

import httpx

from invito.email_service.base import EmailServiceBase
from invito.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
    ) -> str | None:
        """Send email via Resend and return the Resend email id."""
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self._config.emails_from,
                    "to": [to_address],
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                },
            )
            response.raise_for_status()

        resend_email_id = response.json().get("id")
        logger.info(f"Sent {email_type} email to {to_address} (resend id {resend_email_id})")
        return resend_email_id

    async def send_invitation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
        rsvp_url: str,
        invite_code: str,
        response_deadline: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_invitation(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
            rsvp_url=rsvp_url,
            invite_code=invite_code,
            response_deadline=response_deadline,
        )
        await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type="invitation",
        )

    async def send_rsvp_confirmation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        status: str,
        event_date: str,
        event_location: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_confirmation(
            guest_name=guest_name,
            event_title=event_title,
            status=status,
            event_date=event_date,
            event_location=event_location,
        )
        await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type="confirmation",
        )

    async def send_cancellation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_cancellation(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
        )
        await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type="cancellation",
        )
