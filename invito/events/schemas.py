from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from invito.events.dtos import EventDTO, OrganizerDTO
from invito.guests.dtos import GuestDTO
from invito.guests.schemas import GuestResponse


class OrganizerResponse(BaseModel):
    id: UUID
    name: str | None = None
    email: str

    @classmethod
    def from_dto(cls, organizer: OrganizerDTO) -> "OrganizerResponse":
        return cls(id=organizer.id, name=organizer.name, email=organizer.email)


class EventResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    description: str | None = None
    banner_base64: str | None = Field(default=None, alias="bannerBase64")
    location: str | None = None
    date: datetime
    rsvp_deadline: datetime | None = Field(default=None, alias="rsvpDeadline")
    max_capacity: int = Field(alias="maxCapacity")
    organizer_id: UUID | None = Field(default=None, alias="organizerId")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @classmethod
    def fields_from_dto(cls, event: EventDTO) -> dict:
        return dict(
            id=event.id,
            title=event.title,
            description=event.description,
            banner_base64=event.banner_base64,
            location=event.location,
            date=event.date,
            rsvp_deadline=event.rsvp_deadline,
            max_capacity=event.max_capacity,
            organizer_id=event.organizer_id,
            created_at=event.created_at,
        )

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(**cls.fields_from_dto(event))


class EventDetailResponse(EventResponse):
    """Event with its guest list and live confirmation figures."""

    guests: list[GuestResponse] = []
    organizer: OrganizerResponse | None = None
    total_yes: int = Field(alias="totalYes")
    is_full: bool = Field(alias="isFull")

    @classmethod
    def build(
        cls,
        event: EventDTO,
        guests: list[GuestDTO],
        total_yes: int,
        is_full: bool,
        organizer: OrganizerDTO | None = None,
    ) -> "EventDetailResponse":
        return cls(
            **cls.fields_from_dto(event),
            guests=[GuestResponse.from_dto(guest) for guest in guests],
            organizer=OrganizerResponse.from_dto(organizer) if organizer else None,
            total_yes=total_yes,
            is_full=is_full,
        )
