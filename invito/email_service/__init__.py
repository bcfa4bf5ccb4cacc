from invito.config.settings import settings
from invito.email_service.base import EmailServiceBase
from invito.email_service.resend_service import ResendEmailService
from invito.email_service.smtp_service import SMTPEmailService
from invito.email_service.templates import EmailTemplates


def get_email_service() -> EmailServiceBase:
    if settings.resend_api_key:
        return ResendEmailService(config=settings)
    return SMTPEmailService()


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "get_email_service",
]
