"""Write model for creating events."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.events.dtos import EventDTO
from invito.events.repository.orm_models import Event

logger = logging.getLogger(__name__)


class EventCreateWriteModel(ABC):
    @abstractmethod
    async def create_event(
        self,
        title: str,
        date: datetime,
        max_capacity: int,
        rsvp_deadline: datetime | None = None,
        description: str | None = None,
        location: str | None = None,
        organizer_id: UUID | None = None,
        banner_base64: str | None = None,
    ) -> EventDTO:
        """Create an event. `max_capacity` must be at least 1."""
        raise NotImplementedError


class SqlEventCreateWriteModel(EventCreateWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_event(
        self,
        title: str,
        date: datetime,
        max_capacity: int,
        rsvp_deadline: datetime | None = None,
        description: str | None = None,
        location: str | None = None,
        organizer_id: UUID | None = None,
        banner_base64: str | None = None,
    ) -> EventDTO:
        if max_capacity < 1:
            raise ValueError("max_capacity must be a positive integer")

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = Event(
                title=title,
                date=date,
                max_capacity=max_capacity,
                rsvp_deadline=rsvp_deadline,
                description=description,
                location=location,
                organizer_id=organizer_id,
                banner_base64=banner_base64,
            )
            session.add(event)
            await session.flush()
            await session.refresh(event)
            event_dto = EventDTO.from_event(event)

        logger.info(f"Created event {event_dto.id} with capacity {max_capacity}")
        return event_dto
