from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from invito.events.dtos import EventDTO, OrganizerDTO
from invito.utils_time import as_utc

if TYPE_CHECKING:
    from invito.guests.repository.orm_models import Guest


class GuestNotFoundError(Exception):
    """Raised when an invite code or guest id does not match any guest."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"No guest found for '{reference}'")


class CapacityExceededError(Exception):
    """Raised when confirming a guest would push the event past its capacity."""

    def __init__(self, event_id: UUID, max_capacity: int) -> None:
        self.event_id = event_id
        self.max_capacity = max_capacity
        super().__init__(f"Event '{event_id}' already has {max_capacity} confirmed guests")


class RSVPDeadlinePassedError(Exception):
    """Raised when a guest tries to confirm after the event's RSVP deadline."""

    def __init__(self, event_id: UUID, deadline: datetime) -> None:
        self.event_id = event_id
        self.deadline = deadline
        super().__init__(f"RSVP deadline for event '{event_id}' passed at {deadline.isoformat()}")


class InviteCodeExhaustedError(Exception):
    """Raised when no unused invite code could be generated."""


class GuestStatus(str, Enum):
    PENDING = "PENDING"
    YES = "YES"
    NO = "NO"
    MAYBE = "MAYBE"


# Statuses a guest may choose when responding
RSVP_STATUSES = frozenset({GuestStatus.YES, GuestStatus.NO, GuestStatus.MAYBE})


@dataclass(frozen=True)
class GuestDTO:
    """DTO for guest data."""

    id: UUID
    event_id: UUID
    invite_code: str
    name: str
    email: str
    status: GuestStatus
    title: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_guest(cls, guest: "Guest") -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.uuid,
            event_id=guest.event_id,
            invite_code=guest.invite_code,
            name=guest.name,
            email=guest.email,
            status=GuestStatus(guest.status),
            title=guest.title,
            created_at=as_utc(guest.created_at),
        )


@dataclass(frozen=True)
class RSVPInfoDTO:
    """Everything the RSVP page shows for an invite code."""

    guest: GuestDTO
    event: EventDTO
    total_yes: int
    organizer: OrganizerDTO | None = None
    # All guests of the event, newest first
    guests: list[GuestDTO] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return self.total_yes >= self.event.max_capacity
