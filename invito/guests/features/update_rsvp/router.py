import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from invito.config.database import TransientStoreError
from invito.config.settings import settings
from invito.guests.dtos import (
    RSVP_STATUSES,
    CapacityExceededError,
    GuestNotFoundError,
    GuestStatus,
    RSVPDeadlinePassedError,
)
from invito.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from invito.guests.schemas import GuestResponse
from invito.guests.urls import UPDATE_RSVP_URL
from invito.notifications import get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()


class RSVPSubmit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    invite_code: str = Field(alias="inviteCode", min_length=1)
    status: GuestStatus

    @field_validator("status")
    @classmethod
    def status_must_be_a_response(cls, value: GuestStatus) -> GuestStatus:
        if value not in RSVP_STATUSES:
            raise ValueError("status must be one of YES, NO or MAYBE")
        return value


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(notifier=get_notifier())


@router.post(UPDATE_RSVP_URL, response_model=GuestResponse)
async def submit_rsvp(
    rsvp_data: RSVPSubmit,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> GuestResponse:
    """
    Respond to an invitation with YES, NO or MAYBE.
    A YES is only accepted while the event has a free slot.
    """
    try:
        async with asyncio.timeout(settings.admission_timeout_seconds):
            guest = await write_model.submit_rsvp(
                invite_code=rsvp_data.invite_code,
                status=rsvp_data.status,
            )
    except GuestNotFoundError:
        raise HTTPException(status_code=404, detail="Invalid or expired invite code")
    except CapacityExceededError:
        raise HTTPException(status_code=400, detail="Maximum capacity reached")
    except RSVPDeadlinePassedError:
        raise HTTPException(status_code=400, detail="The RSVP deadline has passed")
    except (TransientStoreError, TimeoutError) as e:
        logger.warning(f"RSVP for {rsvp_data.invite_code} could not be processed: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )

    return GuestResponse.from_dto(guest)
