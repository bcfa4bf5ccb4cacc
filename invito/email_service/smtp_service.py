import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from invito.config.settings import settings
from invito.email_service.base import EmailServiceBase
from invito.email_service.templates import EmailTemplates


class SMTPEmailService(EmailServiceBase):
    def __init__(self):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_user
        self.password = settings.smtp_password
        self.from_address = settings.emails_from

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        part1 = MIMEText(text_body, "plain")
        part2 = MIMEText(html_body, "html")
        msg.attach(part1)
        msg.attach(part2)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        if self.username and self.password:
            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        else:
            # For development/testing without authentication (Mailhog)
            with smtplib.SMTP(self.host, self.port) as server:
                server.send_message(msg)

    async def _deliver(self, to_address: str, rendered: tuple[str, str, str]) -> None:
        subject, html_body, text_body = rendered
        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._send, msg)

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
        await self._deliver(
            to_address,
            EmailTemplates.render_invitation(
                guest_name=guest_name,
                event_title=event_title,
                event_date=event_date,
                event_location=event_location,
                rsvp_url=rsvp_url,
                invite_code=invite_code,
                response_deadline=response_deadline,
            ),
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
        await self._deliver(
            to_address,
            EmailTemplates.render_confirmation(
                guest_name=guest_name,
                event_title=event_title,
                status=status,
                event_date=event_date,
                event_location=event_location,
            ),
        )

    async def send_cancellation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
    ) -> None:
        await self._deliver(
            to_address,
            EmailTemplates.render_cancellation(
                guest_name=guest_name,
                event_title=event_title,
                event_date=event_date,
                event_location=event_location,
            ),
        )
