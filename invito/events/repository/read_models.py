import abc
from collections import defaultdict
from functools import partial
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.events.dtos import EventDTO, EventSummaryDTO, OrganizerDTO
from invito.events.repository.orm_models import Event
from invito.guests.dtos import GuestDTO, GuestStatus
from invito.guests.repository.orm_models import Guest
from invito.models.user import User


class EventReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_event_summary(self, event_id: UUID) -> EventSummaryDTO | None:
        """Get an event with its guests and confirmation figures, or None."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_events(
        self, organizer_id: UUID, email: str | None = None
    ) -> list[EventSummaryDTO]:
        """Get events a user organizes or, by guest email, is invited to.

        Each event comes with its guests and organizer, soonest event first.
        """
        raise NotImplementedError


class SqlEventReadModel(EventReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self._session_overwrite = session_overwrite

    async def get_event_summary(self, event_id: UUID) -> EventSummaryDTO | None:
        async with self.async_session_manager(
            auto_commit=False, session_overwrite=self._session_overwrite
        ) as session:
            event = await session.get(Event, event_id)
            if event is None:
                return None

            summaries = await self._summarize(session, [event])
            return summaries[0]

    async def list_events(
        self, organizer_id: UUID, email: str | None = None
    ) -> list[EventSummaryDTO]:
        async with self.async_session_manager(
            auto_commit=False, session_overwrite=self._session_overwrite
        ) as session:
            conditions = [Event.organizer_id == organizer_id]
            if email:
                invited = select(Guest.event_id).where(func.lower(Guest.email) == email.lower())
                conditions.append(Event.uuid.in_(invited))

            stmt = select(Event).where(or_(*conditions)).order_by(Event.date.asc())
            events = (await session.execute(stmt)).scalars().all()
            return await self._summarize(session, events)

    async def _summarize(self, session, events) -> list[EventSummaryDTO]:
        """Attach guests (newest first) and organizers to events, one query each."""
        if not events:
            return []

        event_ids = [event.uuid for event in events]
        guests_stmt = (
            select(Guest)
            .where(Guest.event_id.in_(event_ids))
            .order_by(Guest.created_at.desc(), Guest.name)
        )
        guests_by_event: dict[UUID, list[GuestDTO]] = defaultdict(list)
        for guest in (await session.execute(guests_stmt)).scalars():
            guests_by_event[guest.event_id].append(GuestDTO.from_guest(guest))

        organizer_ids = {event.organizer_id for event in events if event.organizer_id}
        organizers: dict[UUID, OrganizerDTO] = {}
        if organizer_ids:
            users = await session.execute(select(User).where(User.uuid.in_(organizer_ids)))
            organizers = {user.uuid: OrganizerDTO.from_user(user) for user in users.scalars()}

        summaries = []
        for event in events:
            guests = guests_by_event[event.uuid]
            summaries.append(
                EventSummaryDTO(
                    event=EventDTO.from_event(event),
                    total_yes=sum(1 for guest in guests if guest.status == GuestStatus.YES),
                    guests=guests,
                    organizer=organizers.get(event.organizer_id),
                )
            )
        return summaries
