from functools import lru_cache

from invito.config.settings import settings
from invito.email_service import get_email_service
from invito.notifications.notifier import Notifier


@lru_cache
def get_notifier() -> Notifier:
    return Notifier(email_service=get_email_service(), frontend_url=settings.frontend_url)


__all__ = [
    "Notifier",
    "get_notifier",
]
