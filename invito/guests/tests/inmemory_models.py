"""In-memory models for testing - no database required."""

import asyncio
from dataclasses import replace
from datetime import timedelta
from uuid import UUID, uuid4

from invito.email_service.base import EmailServiceBase
from invito.events.dtos import EventDTO, EventNotFoundError
from invito.guests.admission import check_admission
from invito.guests.dtos import (
    RSVP_STATUSES,
    GuestDTO,
    GuestNotFoundError,
    GuestStatus,
    RSVPInfoDTO,
)
from invito.guests.features.invite_guest.write_model import (
    GuestInviteWriteModel,
    generate_invite_code,
)
from invito.guests.features.remove_guest.write_model import GuestRemovalWriteModel
from invito.guests.repository.read_models import RSVPReadModel
from invito.guests.repository.write_models import RSVPWriteModel
from invito.utils_time import utc_now


# =============================================================================
# Email services
# =============================================================================


class InMemoryEmailService(EmailServiceBase):
    """Records emails instead of sending them."""

    def __init__(self):
        self.sent_emails: list[dict] = []

    async def send_invitation(self, to_address: str, **kwargs) -> None:
        self.sent_emails.append({"type": "invitation", "to_address": to_address, **kwargs})

    async def send_rsvp_confirmation(self, to_address: str, **kwargs) -> None:
        self.sent_emails.append({"type": "confirmation", "to_address": to_address, **kwargs})

    async def send_cancellation(self, to_address: str, **kwargs) -> None:
        self.sent_emails.append({"type": "cancellation", "to_address": to_address, **kwargs})


class FailingEmailService(EmailServiceBase):
    """Every send fails, like a mail provider that is down."""

    def __init__(self):
        self.attempts = 0

    async def _fail(self, *args, **kwargs) -> None:
        self.attempts += 1
        raise ConnectionError("mail provider unreachable")

    send_invitation = _fail
    send_rsvp_confirmation = _fail
    send_cancellation = _fail


# =============================================================================
# In-Memory Storage
# =============================================================================


def create_test_event(max_capacity: int = 2, rsvp_deadline=None, **kwargs) -> EventDTO:
    return EventDTO(
        id=kwargs.pop("id", uuid4()),
        title=kwargs.pop("title", "Launch Party"),
        date=kwargs.pop("date", utc_now() + timedelta(days=30)),
        max_capacity=max_capacity,
        rsvp_deadline=rsvp_deadline,
        location=kwargs.pop("location", "Lisbon"),
        created_at=utc_now(),
        **kwargs,
    )


def create_test_guest(
    event: EventDTO,
    invite_code: str = "ABC123",
    name: str = "Ana Silva",
    email: str = "ana@example.com",
    status: GuestStatus = GuestStatus.PENDING,
) -> GuestDTO:
    return GuestDTO(
        id=uuid4(),
        event_id=event.id,
        invite_code=invite_code,
        name=name,
        email=email,
        status=status,
        created_at=utc_now(),
    )


class InMemoryStore:
    """Events and guests shared by the in-memory models."""

    def __init__(self, events: list[EventDTO] = None, guests: list[GuestDTO] = None):
        self.events: dict[UUID, EventDTO] = {event.id: event for event in events or []}
        self.guests: dict[UUID, GuestDTO] = {guest.id: guest for guest in guests or []}

    def guest_by_code(self, invite_code: str) -> GuestDTO | None:
        return next((g for g in self.guests.values() if g.invite_code == invite_code), None)

    def confirmed_count(self, event_id: UUID, exclude_guest_id: UUID | None = None) -> int:
        return sum(
            1
            for g in self.guests.values()
            if g.event_id == event_id and g.status == GuestStatus.YES and g.id != exclude_guest_id
        )


# =============================================================================
# In-Memory Read / Write Models
# =============================================================================


class InMemoryRSVPReadModel(RSVPReadModel):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_rsvp_info(self, invite_code: str) -> RSVPInfoDTO | None:
        guest = self.store.guest_by_code(invite_code)
        if guest is None:
            return None
        event = self.store.events[guest.event_id]
        return RSVPInfoDTO(
            guest=guest,
            event=event,
            total_yes=self.store.confirmed_count(event.id),
            guests=[g for g in self.store.guests.values() if g.event_id == event.id],
        )


class InMemoryRSVPWriteModel(RSVPWriteModel):
    def __init__(self, store: InMemoryStore, enforce_deadline: bool = True):
        self.store = store
        self.enforce_deadline = enforce_deadline

    async def submit_rsvp(self, invite_code: str, status: GuestStatus) -> GuestDTO:
        status = GuestStatus(status)
        if status not in RSVP_STATUSES:
            raise ValueError(f"'{status.value}' is not a valid RSVP response")
        guest = self.store.guest_by_code(invite_code)
        if guest is None:
            raise GuestNotFoundError(invite_code)

        event = self.store.events[guest.event_id]
        check_admission(
            event,
            status,
            self.store.confirmed_count(event.id, exclude_guest_id=guest.id),
            enforce_deadline=self.enforce_deadline,
        )
        guest = replace(guest, status=status)
        self.store.guests[guest.id] = guest
        return guest


class RaisingRSVPWriteModel(RSVPWriteModel):
    """Fails every submission with the given exception."""

    def __init__(self, error: Exception):
        self.error = error

    async def submit_rsvp(self, invite_code: str, status: GuestStatus) -> GuestDTO:
        raise self.error


class SlowRSVPWriteModel(RSVPWriteModel):
    """Never answers in time, like a store stuck behind a lock."""

    async def submit_rsvp(self, invite_code: str, status: GuestStatus) -> GuestDTO:
        await asyncio.sleep(10)
        raise AssertionError("should have timed out")


class InMemoryGuestInviteWriteModel(GuestInviteWriteModel):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def invite_guest(
        self, event_id: UUID, name: str, email: str, title: str | None = None
    ) -> GuestDTO:
        if event_id not in self.store.events:
            raise EventNotFoundError(event_id)
        guest = GuestDTO(
            id=uuid4(),
            event_id=event_id,
            invite_code=generate_invite_code(),
            name=name,
            email=email,
            title=title,
            status=GuestStatus.PENDING,
            created_at=utc_now(),
        )
        self.store.guests[guest.id] = guest
        return guest


class InMemoryGuestRemovalWriteModel(GuestRemovalWriteModel):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def remove_guest(self, guest_id: UUID) -> GuestDTO:
        guest = self.store.guests.pop(guest_id, None)
        if guest is None:
            raise GuestNotFoundError(str(guest_id))
        return guest


class RaisingRSVPReadModel(RSVPReadModel):
    def __init__(self, error: Exception):
        self.error = error

    async def get_rsvp_info(self, invite_code: str) -> RSVPInfoDTO | None:
        raise self.error


class RaisingGuestInviteWriteModel(GuestInviteWriteModel):
    def __init__(self, error: Exception):
        self.error = error

    async def invite_guest(
        self, event_id: UUID, name: str, email: str, title: str | None = None
    ) -> GuestDTO:
        raise self.error


class RaisingGuestRemovalWriteModel(GuestRemovalWriteModel):
    def __init__(self, error: Exception):
        self.error = error

    async def remove_guest(self, guest_id: UUID) -> GuestDTO:
        raise self.error
