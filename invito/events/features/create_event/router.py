import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import IntegrityError

from invito.config.database import TransientStoreError
from invito.events.features.create_event.write_model import (
    EventCreateWriteModel,
    SqlEventCreateWriteModel,
)
from invito.events.schemas import EventResponse
from invito.events.urls import EVENTS_URL

logger = logging.getLogger(__name__)

router = APIRouter()


class CreateEventRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    banner_base64: str | None = Field(default=None, alias="bannerBase64")
    location: str | None = Field(default=None, max_length=500)
    date: datetime
    rsvp_deadline: datetime | None = Field(default=None, alias="rsvpDeadline")
    max_capacity: int = Field(alias="maxCapacity", ge=1)
    organizer_id: UUID | None = Field(default=None, alias="organizerId")


def get_event_create_write_model() -> EventCreateWriteModel:
    """Dependency to get event create write model instance."""
    return SqlEventCreateWriteModel()


@router.post(EVENTS_URL, response_model=EventResponse)
async def create_event(
    request: CreateEventRequest,
    write_model: EventCreateWriteModel = Depends(get_event_create_write_model),
) -> EventResponse:
    """Create an event with a capacity limit and an optional RSVP deadline."""
    try:
        event = await write_model.create_event(
            title=request.title,
            date=request.date,
            max_capacity=request.max_capacity,
            rsvp_deadline=request.rsvp_deadline,
            description=request.description,
            location=request.location,
            organizer_id=request.organizer_id,
            banner_base64=request.banner_base64,
        )
    except IntegrityError:
        # Only the organizer foreign key can fail here
        raise HTTPException(status_code=400, detail="Organizer does not exist")
    except TransientStoreError as e:
        logger.warning(f"Event {request.title!r} could not be created: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )
    return EventResponse.from_dto(event)
