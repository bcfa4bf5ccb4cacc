"""Response schemas shared by the guest endpoints.

JSON keys are camelCase to match what the mobile client sends and reads.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from invito.guests.dtos import GuestDTO, GuestStatus


class GuestResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    event_id: UUID = Field(alias="eventId")
    invite_code: str = Field(alias="inviteCode")
    name: str
    email: str
    title: str | None = None
    status: GuestStatus
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "GuestResponse":
        return cls(
            id=guest.id,
            event_id=guest.event_id,
            invite_code=guest.invite_code,
            name=guest.name,
            email=guest.email,
            title=guest.title,
            status=guest.status,
            created_at=guest.created_at,
        )
