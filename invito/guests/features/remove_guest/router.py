import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from invito.config.database import TransientStoreError
from invito.guests.dtos import GuestNotFoundError
from invito.guests.features.remove_guest.write_model import (
    GuestRemovalWriteModel,
    SqlGuestRemovalWriteModel,
)
from invito.guests.urls import REMOVE_GUEST_URL
from invito.notifications import get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()


class RemoveGuestResponse(BaseModel):
    success: bool


def get_guest_removal_write_model() -> GuestRemovalWriteModel:
    """Dependency to get guest removal write model instance."""
    return SqlGuestRemovalWriteModel(notifier=get_notifier())


@router.delete(REMOVE_GUEST_URL, response_model=RemoveGuestResponse)
async def remove_guest(
    guest_id: UUID,
    write_model: GuestRemovalWriteModel = Depends(get_guest_removal_write_model),
) -> RemoveGuestResponse:
    """
    Remove a guest from an event, whatever their answer, and notify them.
    """
    try:
        await write_model.remove_guest(guest_id)
    except GuestNotFoundError:
        raise HTTPException(status_code=404, detail="Guest not found")
    except TransientStoreError as e:
        logger.warning(f"Guest {guest_id} could not be removed: {e!r}")
        raise HTTPException(
            status_code=503, detail="Service temporarily unavailable, please try again"
        )

    return RemoveGuestResponse(success=True)
