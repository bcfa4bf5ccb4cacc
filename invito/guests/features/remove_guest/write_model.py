"""Write model for removing a guest from an event."""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.events.dtos import EventDTO
from invito.events.repository.orm_models import Event
from invito.guests.admission import EventLocks, event_locks
from invito.guests.dtos import GuestDTO, GuestNotFoundError
from invito.guests.repository.orm_models import Guest
from invito.notifications.notifier import Notifier

logger = logging.getLogger(__name__)


class GuestRemovalWriteModel(ABC):
    @abstractmethod
    async def remove_guest(self, guest_id: UUID) -> GuestDTO:
        """Delete a guest whatever its status and return the deleted record."""
        raise NotImplementedError


class SqlGuestRemovalWriteModel(GuestRemovalWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        notifier: Notifier | None = None,
        locks: EventLocks | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.notifier = notifier
        self.locks = locks if locks is not None else event_locks

    async def remove_guest(self, guest_id: UUID) -> GuestDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise GuestNotFoundError(str(guest_id))
            event_id = guest.event_id

        # Do not delete a guest while an admission for its event is mid-flight
        async with self.locks.hold(event_id):
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                guest = await session.get(Guest, guest_id, populate_existing=True)
                if guest is None:
                    raise GuestNotFoundError(str(guest_id))
                event = await session.get(Event, event_id)

                guest_dto = GuestDTO.from_guest(guest)
                event_dto = EventDTO.from_event(event)

                await session.delete(guest)
                await session.flush()

        logger.info(f"Removed guest {guest_id} ({guest_dto.status.value}) from event {event_id}")
        if self.notifier:
            self.notifier.send_cancellation(guest_dto, event_dto)
        return guest_dto
