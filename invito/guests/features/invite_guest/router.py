import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.exc import IntegrityError

from invito.config.database import TransientStoreError
from invito.events.dtos import EventNotFoundError
from invito.guests.dtos import InviteCodeExhaustedError
from invito.guests.features.invite_guest.write_model import (
    GuestInviteWriteModel,
    SqlGuestInviteWriteModel,
)
from invito.guests.schemas import GuestResponse
from invito.guests.urls import INVITE_GUEST_URL
from invito.notifications import get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()


class InviteGuestRequest(BaseModel):
    """Request body for inviting a guest."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    title: str | None = Field(default=None, max_length=50)
    event_id: UUID = Field(alias="eventId")


def get_guest_invite_write_model() -> GuestInviteWriteModel:
    """Dependency to get guest invite write model instance."""
    return SqlGuestInviteWriteModel(notifier=get_notifier())


@router.post(INVITE_GUEST_URL, response_model=GuestResponse)
async def invite_guest(
    request: InviteGuestRequest,
    write_model: GuestInviteWriteModel = Depends(get_guest_invite_write_model),
) -> GuestResponse:
    """
    Add a guest to an event's list and email them their invite code.
    """
    try:
        guest = await write_model.invite_guest(
            event_id=request.event_id,
            name=request.name,
            email=request.email,
            title=request.title,
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (TransientStoreError, InviteCodeExhaustedError, IntegrityError) as e:
        # No guest was stored; inviting again is safe
        logger.warning(f"Guest for event {request.event_id} could not be invited: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )

    return GuestResponse.from_dto(guest)
