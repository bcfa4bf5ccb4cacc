"""RSVP write model - the admission controller. Returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from functools import partial
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.config.settings import settings
from invito.events.dtos import EventDTO
from invito.events.repository.orm_models import Event
from invito.guests.admission import EventLocks, check_admission, event_locks
from invito.guests.dtos import RSVP_STATUSES, GuestDTO, GuestNotFoundError, GuestStatus
from invito.guests.repository.orm_models import Guest
from invito.notifications.notifier import Notifier
from invito.utils_time import utc_now

logger = logging.getLogger(__name__)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(self, invite_code: str, status: GuestStatus) -> GuestDTO:
        """
        Record a guest's response to an invitation.

        Raises GuestNotFoundError for an unknown code, CapacityExceededError when
        the event is full and RSVPDeadlinePassedError when confirming too late.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """SQL implementation of the RSVP admission controller.

    The confirmed count and the status write happen in one transaction, inside a
    per-event lock and with the event row locked FOR UPDATE, so concurrent YES
    responses can never overbook an event.
    """

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        notifier: Notifier | None = None,
        locks: EventLocks | None = None,
        enforce_deadline: bool | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_overwrite = session_overwrite
        self._notifier = notifier
        self._locks = locks if locks is not None else event_locks
        self._enforce_deadline = (
            settings.enforce_rsvp_deadline if enforce_deadline is None else enforce_deadline
        )
        self._clock = clock

    @property
    def notifier(self) -> Notifier | None:
        return self._notifier

    async def _get_guest_by_invite_code(self, session, invite_code: str) -> Guest | None:
        """Get a guest by invite code, matched exactly as stored."""
        stmt = select(Guest).where(Guest.invite_code == invite_code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _lock_event(self, session, event_id: UUID) -> Event | None:
        """Load the event and hold its row lock until the transaction ends."""
        stmt = select(Event).where(Event.uuid == event_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _count_confirmed(self, session, event_id: UUID, exclude_guest_id: UUID) -> int:
        """Count YES guests of an event, leaving out the requesting guest."""
        stmt = (
            select(func.count())
            .select_from(Guest)
            .where(Guest.event_id == event_id)
            .where(Guest.status == GuestStatus.YES)
            .where(Guest.uuid != exclude_guest_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def submit_rsvp(self, invite_code: str, status: GuestStatus) -> GuestDTO:
        status = GuestStatus(status)
        if status not in RSVP_STATUSES:
            raise ValueError(f"'{status.value}' is not a valid RSVP response")

        # 1. Resolve the code to find which event to lock
        async with self.async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await self._get_guest_by_invite_code(session, invite_code)
            if guest is None:
                raise GuestNotFoundError(invite_code)
            guest_id = guest.uuid
            event_id = guest.event_id

        # 2. Count and write atomically for this event
        async with self._locks.hold(event_id):
            async with self.async_session_manager(
                session_overwrite=self._session_overwrite
            ) as session:
                event = await self._lock_event(session, event_id)
                guest = await session.get(Guest, guest_id, populate_existing=True)
                # The guest may have been removed while we waited for the lock
                if event is None or guest is None:
                    raise GuestNotFoundError(invite_code)

                event_dto = EventDTO.from_event(event)
                confirmed_count = 0
                if status == GuestStatus.YES:
                    confirmed_count = await self._count_confirmed(session, event_id, guest_id)
                check_admission(
                    event_dto,
                    status,
                    confirmed_count,
                    enforce_deadline=self._enforce_deadline,
                    now=self._clock(),
                )

                guest.status = status
                await session.flush()
                await session.refresh(guest)
                guest_dto = GuestDTO.from_guest(guest)

        logger.info(f"Guest {guest_id} answered {status.value} for event {event_id}")

        # 3. Best-effort confirmation, after the commit
        if self._notifier:
            self._notifier.send_rsvp_confirmation(guest_dto, event_dto, status)

        return guest_dto
