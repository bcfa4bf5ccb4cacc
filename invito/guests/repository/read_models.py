import abc
from functools import partial

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invito.config.database import async_session_manager
from invito.events.dtos import EventDTO, OrganizerDTO
from invito.events.repository.orm_models import Event
from invito.guests.dtos import GuestDTO, GuestStatus, RSVPInfoDTO
from invito.guests.repository.orm_models import Guest
from invito.models.user import User


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_rsvp_info(self, invite_code: str) -> RSVPInfoDTO | None:
        """
        Get RSVP page info by invite code.
        Returns None when the code is unknown.
        """
        raise NotImplementedError


class SqlRSVPReadModel(RSVPReadModel):
    """SQL implementation of RSVP read model."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self._session_overwrite = session_overwrite

    async def get_rsvp_info(self, invite_code: str) -> RSVPInfoDTO | None:
        """
        Get the guest, its event, the organizer and the event's guest list.
        Confirmation figures are computed live, never cached.
        """
        async with self.async_session_manager(
            auto_commit=False, session_overwrite=self._session_overwrite
        ) as session:
            stmt = (
                select(Guest, Event)
                .join(Event, Guest.event_id == Event.uuid)
                .where(Guest.invite_code == invite_code)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None
            guest, event = row

            # Get organizer if the event has one
            organizer = None
            if event.organizer_id:
                user = await session.get(User, event.organizer_id)
                if user:
                    organizer = OrganizerDTO.from_user(user)

            guests_stmt = (
                select(Guest)
                .where(Guest.event_id == event.uuid)
                .order_by(Guest.created_at.desc(), Guest.name)
            )
            event_guests = (await session.execute(guests_stmt)).scalars().all()

            total_yes_stmt = (
                select(func.count())
                .select_from(Guest)
                .where(Guest.event_id == event.uuid)
                .where(Guest.status == GuestStatus.YES)
            )
            total_yes = (await session.execute(total_yes_stmt)).scalar_one()

            return RSVPInfoDTO(
                guest=GuestDTO.from_guest(guest),
                event=EventDTO.from_event(event),
                total_yes=total_yes,
                organizer=organizer,
                guests=[GuestDTO.from_guest(g) for g in event_guests],
            )
