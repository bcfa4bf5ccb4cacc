import html
from dataclasses import dataclass


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "Invitation: {event_title}"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #1c1b1f; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #6750A4;">You're invited!</h1>

        <p>Hi {guest_name},</p>

        <p>You have been invited to <strong>{event_title}</strong>.</p>

        <div style="background-color: #f5f3ff; padding: 20px; border-radius: 12px; margin: 20px 0; border-left: 4px solid #6750A4;">
            <p><strong>When:</strong> {event_date}</p>
            <p><strong>Where:</strong> {event_location}</p>
            <p><strong>Your invite code:</strong> {invite_code}</p>
        </div>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #6750A4; color: white; padding: 16px 32px; text-decoration: none; border-radius: 100px; font-weight: 600;">
                Respond to the invitation
            </a>
        </div>

        <p>If the button doesn't work, open this link in your browser:</p>
        <p style="word-break: break-all;"><a href="{rsvp_url}">{rsvp_url}</a></p>

        <p>{response_deadline}</p>
    </body>
    </html>
    """
    INVITATION_TEXT = """
    Hi {guest_name},

    You have been invited to {event_title}.

    When: {event_date}
    Where: {event_location}
    Your invite code: {invite_code}

    Respond here: {rsvp_url}

    {response_deadline}
    """

    CONFIRMATION_SUBJECT = "Confirmation: {event_title}"
    CONFIRMATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #1c1b1f; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #6750A4;">Thanks for your response!</h1>

        <p>Hi {guest_name},</p>

        <p>You {status_text} for <strong>{event_title}</strong>.</p>

        <div style="background-color: #f5f3ff; padding: 20px; border-radius: 12px; margin: 20px 0;">
            <p><strong>When:</strong> {event_date}</p>
            <p><strong>Where:</strong> {event_location}</p>
        </div>

        <p>{closing}</p>
    </body>
    </html>
    """
    CONFIRMATION_TEXT = """
    Hi {guest_name},

    You {status_text} for {event_title}.

    When: {event_date}
    Where: {event_location}

    {closing}
    """

    CANCELLATION_SUBJECT = "Invitation cancelled: {event_title}"
    CANCELLATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #1c1b1f; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Hi {guest_name},</p>

        <p>Your invitation to <strong>{event_title}</strong> ({event_date}, {event_location}) has been cancelled by the organizer.</p>

        <p>Your invite code is no longer valid.</p>
    </body>
    </html>
    """
    CANCELLATION_TEXT = """
    Hi {guest_name},

    Your invitation to {event_title} ({event_date}, {event_location}) has been cancelled by the organizer.

    Your invite code is no longer valid.
    """

    STATUS_TEXT = {
        "YES": "confirmed your attendance",
        "NO": "declined the invitation",
        "MAYBE": "answered maybe",
    }
    CLOSING_TEXT = {
        "YES": "We look forward to seeing you there!",
        "NO": "Sorry you can't make it. You can change your answer with your invite code.",
        "MAYBE": "Let the organizer know once you've decided.",
    }

    @classmethod
    def get_confirmation_wording(cls, status: str) -> tuple[str, str]:
        """Return (status_text, closing) for an RSVP status."""
        return (
            cls.STATUS_TEXT.get(status, "responded"),
            cls.CLOSING_TEXT.get(status, ""),
        )

    @staticmethod
    def escaped(values: dict) -> dict:
        """Values safe to place in an HTML body."""
        return {key: html.escape(str(value)) for key, value in values.items()}

    @staticmethod
    def deadline_sentence(response_deadline: str) -> str:
        if not response_deadline:
            return ""
        return f"Please respond by {response_deadline}."

    @classmethod
    def render_invitation(
        cls,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
        rsvp_url: str,
        invite_code: str,
        response_deadline: str,
    ) -> tuple[str, str, str]:
        """Return (subject, html_body, text_body) for an invitation."""
        values = dict(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
            rsvp_url=rsvp_url,
            invite_code=invite_code,
            response_deadline=cls.deadline_sentence(response_deadline),
        )
        return (
            cls.INVITATION_SUBJECT.format(event_title=event_title),
            cls.INVITATION_HTML.format(**cls.escaped(values)),
            cls.INVITATION_TEXT.format(**values),
        )

    @classmethod
    def render_confirmation(
        cls,
        guest_name: str,
        event_title: str,
        status: str,
        event_date: str,
        event_location: str,
    ) -> tuple[str, str, str]:
        status_text, closing = cls.get_confirmation_wording(status)
        values = dict(
            guest_name=guest_name,
            event_title=event_title,
            status_text=status_text,
            closing=closing,
            event_date=event_date,
            event_location=event_location,
        )
        return (
            cls.CONFIRMATION_SUBJECT.format(event_title=event_title),
            cls.CONFIRMATION_HTML.format(**cls.escaped(values)),
            cls.CONFIRMATION_TEXT.format(**values),
        )

    @classmethod
    def render_cancellation(
        cls,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
    ) -> tuple[str, str, str]:
        values = dict(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
        )
        return (
            cls.CANCELLATION_SUBJECT.format(event_title=event_title),
            cls.CANCELLATION_HTML.format(**cls.escaped(values)),
            cls.CANCELLATION_TEXT.format(**values),
        )
