"""Best-effort guest notifications.

Every send is scheduled as a detached asyncio task: the caller never waits for
the mail provider, and a failed delivery is logged instead of raised so an
RSVP, invite or removal that was committed never looks like it failed.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial

from invito.email_service.base import EmailServiceBase
from invito.events.dtos import EventDTO
from invito.guests.dtos import GuestDTO, GuestStatus
from invito.utils_time import format_event_datetime

logger = logging.getLogger(__name__)


class Notifier:
    def __init__(
        self,
        email_service: EmailServiceBase | None,
        frontend_url: str,
    ) -> None:
        self._email_service = email_service
        self._frontend_url = frontend_url.rstrip("/")
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def rsvp_url(self, invite_code: str) -> str:
        return f"{self._frontend_url}/guest/{invite_code}"

    def send_invite(self, guest: GuestDTO, event: EventDTO) -> asyncio.Task | None:
        if self._email_service is None:
            return None
        send = partial(
            self._email_service.send_invitation,
            to_address=guest.email,
            guest_name=guest.name,
            event_title=event.title,
            event_date=format_event_datetime(event.date),
            event_location=event.location or "",
            rsvp_url=self.rsvp_url(guest.invite_code),
            invite_code=guest.invite_code,
            response_deadline=format_event_datetime(event.rsvp_deadline),
        )
        return self._dispatch("invitation", guest, send)

    def send_rsvp_confirmation(
        self, guest: GuestDTO, event: EventDTO, status: GuestStatus
    ) -> asyncio.Task | None:
        if self._email_service is None:
            return None
        send = partial(
            self._email_service.send_rsvp_confirmation,
            to_address=guest.email,
            guest_name=guest.name,
            event_title=event.title,
            status=GuestStatus(status).value,
            event_date=format_event_datetime(event.date),
            event_location=event.location or "",
        )
        return self._dispatch("confirmation", guest, send)

    def send_cancellation(self, guest: GuestDTO, event: EventDTO) -> asyncio.Task | None:
        if self._email_service is None:
            return None
        send = partial(
            self._email_service.send_cancellation,
            to_address=guest.email,
            guest_name=guest.name,
            event_title=event.title,
            event_date=format_event_datetime(event.date),
            event_location=event.location or "",
        )
        return self._dispatch("cancellation", guest, send)

    def _dispatch(
        self, kind: str, guest: GuestDTO, send: Callable[[], Awaitable[None]]
    ) -> asyncio.Task:
        task = asyncio.create_task(self._deliver(kind, guest, send))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(
        self, kind: str, guest: GuestDTO, send: Callable[[], Awaitable[None]]
    ) -> bool:
        try:
            await send()
        except Exception:
            logger.exception(f"Failed to send {kind} email to {guest.email} (guest {guest.id})")
            return False
        return True

    async def drain(self) -> None:
        """Wait for every scheduled notification to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
