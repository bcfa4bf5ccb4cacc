import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from invito.config.database import TransientStoreError
from invito.events.dtos import EventSummaryDTO
from invito.events.repository.read_models import EventReadModel, SqlEventReadModel
from invito.events.schemas import EventDetailResponse
from invito.events.urls import EVENTS_URL, GET_EVENT_URL

logger = logging.getLogger(__name__)

router = APIRouter()


def get_event_read_model() -> EventReadModel:
    """Dependency to get event read model instance."""
    return SqlEventReadModel()


def to_response(summary: EventSummaryDTO) -> EventDetailResponse:
    return EventDetailResponse.build(
        event=summary.event,
        guests=summary.guests,
        total_yes=summary.total_yes,
        is_full=summary.is_full,
        organizer=summary.organizer,
    )


@router.get(EVENTS_URL, response_model=list[EventDetailResponse])
async def list_events(
    user_id: UUID = Query(alias="userId"),
    email: str | None = None,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[EventDetailResponse]:
    """List events the user organizes or has been invited to, with their guests."""
    try:
        summaries = await read_model.list_events(organizer_id=user_id, email=email)
    except TransientStoreError as e:
        logger.warning(f"Events for user {user_id} could not be listed: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )
    return [to_response(summary) for summary in summaries]


@router.get(GET_EVENT_URL, response_model=EventDetailResponse)
async def get_event(
    event_id: UUID,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventDetailResponse:
    """Event details with guests, `totalYes` and `isFull` for the dashboard."""
    try:
        summary = await read_model.get_event_summary(event_id)
    except TransientStoreError as e:
        logger.warning(f"Event {event_id} could not be loaded: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )
    if summary is None:
        raise HTTPException(status_code=404, detail="Event not found")

    return to_response(summary)
