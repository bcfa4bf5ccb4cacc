"""Write model for inviting guests.

Issues a globally unique invite code, creates the guest as PENDING and schedules
the invitation email. Capacity is not checked here: events may be invited past
their capacity and late responders find them full.
"""

import logging
import secrets
import string
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.config.settings import settings
from invito.events.dtos import EventDTO, EventNotFoundError
from invito.events.repository.orm_models import Event
from invito.guests.dtos import GuestDTO, GuestStatus, InviteCodeExhaustedError
from invito.guests.repository.orm_models import Guest
from invito.notifications.notifier import Notifier

logger = logging.getLogger(__name__)

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 10


def generate_invite_code(length: int | None = None) -> str:
    """Return a random upper-case alphanumeric code, e.g. 'K7Q2ZD'."""
    length = length or settings.invite_code_length
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class GuestInviteWriteModel(ABC):
    """Abstract base class for guest invitation write operations."""

    @abstractmethod
    async def invite_guest(
        self,
        event_id: UUID,
        name: str,
        email: str,
        title: str | None = None,
    ) -> GuestDTO:
        """Invite a guest to an event. Returns DTO.

        Args:
            event_id: The event the guest is invited to
            name: The guest's display name
            email: Where the invitation is sent
            title: Optional honorific, e.g. "Dr."

        Raises:
            EventNotFoundError: if the event does not exist
        """
        raise NotImplementedError


class SqlGuestInviteWriteModel(GuestInviteWriteModel):
    """SQL implementation of guest invitation write operations."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        notifier: Notifier | None = None,
        code_generator: Callable[[], str] = generate_invite_code,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.notifier = notifier
        self.code_generator = code_generator

    async def invite_guest(
        self,
        event_id: UUID,
        name: str,
        email: str,
        title: str | None = None,
    ) -> GuestDTO:
        for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
            try:
                guest_dto, event_dto = await self._create_guest(event_id, name, email, title)
            except IntegrityError:
                # Another request claimed the same code between our check and insert
                if self.session_overwrite is not None or attempt == MAX_CODE_ATTEMPTS:
                    raise
                logger.warning(f"Invite code collision on insert, retrying ({attempt})")
                continue
            break

        logger.info(f"Invited guest {guest_dto.id} to event {event_id}")
        if self.notifier:
            self.notifier.send_invite(guest_dto, event_dto)
        return guest_dto

    async def _create_guest(
        self,
        event_id: UUID,
        name: str,
        email: str,
        title: str | None,
    ) -> tuple[GuestDTO, EventDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            # 1. The event must exist
            event = await session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)

            # 2. Pick a code no guest of any event holds
            invite_code = await self._generate_unused_code(session)

            # 3. Create the guest
            guest = Guest(
                event_id=event_id,
                name=name,
                email=email,
                title=title,
                invite_code=invite_code,
                status=GuestStatus.PENDING,
            )
            session.add(guest)
            await session.flush()
            await session.refresh(guest)

            return GuestDTO.from_guest(guest), EventDTO.from_event(event)

    async def _generate_unused_code(self, session) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self.code_generator()
            if not await self._is_code_taken(session, code):
                return code
        raise InviteCodeExhaustedError(
            f"Could not generate an unused invite code after {MAX_CODE_ATTEMPTS} attempts"
        )

    async def _is_code_taken(self, session, code: str) -> bool:
        result = await session.execute(select(Guest.uuid).where(Guest.invite_code == code))
        return result.first() is not None
