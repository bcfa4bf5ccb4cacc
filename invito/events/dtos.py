from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from invito.utils_time import as_utc

if TYPE_CHECKING:
    from invito.events.repository.orm_models import Event
    from invito.guests.dtos import GuestDTO
    from invito.models.user import User


class EventNotFoundError(Exception):
    """Raised when an event id does not reference an existing event."""

    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        super().__init__(f"Event '{event_id}' does not exist")


@dataclass(frozen=True)
class OrganizerDTO:
    id: UUID
    email: str
    name: str | None = None

    @classmethod
    def from_user(cls, user: "User") -> "OrganizerDTO":
        return cls(id=user.uuid, email=user.email, name=user.name)


@dataclass(frozen=True)
class EventDTO:
    """DTO for event data."""

    id: UUID
    title: str
    date: datetime
    max_capacity: int
    description: str | None = None
    banner_base64: str | None = None
    location: str | None = None
    rsvp_deadline: datetime | None = None
    organizer_id: UUID | None = None
    created_at: datetime | None = None

    @classmethod
    def from_event(cls, event: "Event") -> "EventDTO":
        """Create EventDTO from Event ORM model."""
        return cls(
            id=event.uuid,
            title=event.title,
            date=as_utc(event.date),
            max_capacity=event.max_capacity,
            description=event.description,
            banner_base64=event.banner_base64,
            location=event.location,
            rsvp_deadline=as_utc(event.rsvp_deadline),
            organizer_id=event.organizer_id,
            created_at=as_utc(event.created_at),
        )


@dataclass(frozen=True)
class EventSummaryDTO:
    """Event with its guest list and live confirmation figures."""

    event: EventDTO
    total_yes: int
    guests: list["GuestDTO"] = field(default_factory=list)
    organizer: OrganizerDTO | None = None

    @property
    def is_full(self) -> bool:
        return self.total_yes >= self.event.max_capacity
