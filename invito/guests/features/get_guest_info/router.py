import logging

from fastapi import APIRouter, Depends, HTTPException

from invito.config.database import TransientStoreError
from invito.events.schemas import EventDetailResponse
from invito.guests.repository.read_models import RSVPReadModel, SqlRSVPReadModel
from invito.guests.schemas import GuestResponse
from invito.guests.urls import GET_GUEST_INFO_URL

logger = logging.getLogger(__name__)

router = APIRouter()


class RSVPInfoResponse(GuestResponse):
    """The guest, with its event, organizer and the event's guest list."""

    event: EventDetailResponse


def get_rsvp_read_model() -> RSVPReadModel:
    """Dependency to get RSVP read model instance."""
    return SqlRSVPReadModel()


@router.get(GET_GUEST_INFO_URL, response_model=RSVPInfoResponse)
async def get_guest_info(
    invite_code: str,
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> RSVPInfoResponse:
    """
    Validate an invite code and return what the RSVP page needs.
    """
    try:
        rsvp_info = await read_model.get_rsvp_info(invite_code)
    except TransientStoreError as e:
        logger.warning(f"RSVP info for {invite_code} could not be loaded: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )

    if not rsvp_info:
        raise HTTPException(status_code=404, detail="Invalid or expired invite code")

    guest = GuestResponse.from_dto(rsvp_info.guest)
    return RSVPInfoResponse(
        **guest.model_dump(),
        event=EventDetailResponse.build(
            event=rsvp_info.event,
            guests=rsvp_info.guests,
            total_yes=rsvp_info.total_yes,
            is_full=rsvp_info.is_full,
            organizer=rsvp_info.organizer,
        ),
    )
