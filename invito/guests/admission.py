"""Admission rules for RSVP responses.

Pure helpers deciding whether a response may become YES, plus the per-event lock
registry that serializes admissions for the same event inside one process.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Hashable
from datetime import datetime

from invito.events.dtos import EventDTO
from invito.guests.dtos import CapacityExceededError, GuestStatus, RSVPDeadlinePassedError
from invito.utils_time import as_utc, utc_now

logger = logging.getLogger(__name__)


def is_deadline_passed(rsvp_deadline: datetime | None, now: datetime | None = None) -> bool:
    """True when a deadline is set and `now` is at or after it."""
    if rsvp_deadline is None:
        return False
    now = as_utc(now) if now is not None else utc_now()
    return now >= as_utc(rsvp_deadline)


def has_free_slot(confirmed_count: int, max_capacity: int) -> bool:
    return confirmed_count < max_capacity


def check_admission(
    event: EventDTO,
    desired_status: GuestStatus,
    confirmed_count: int,
    enforce_deadline: bool = True,
    now: datetime | None = None,
) -> None:
    """Raise if `desired_status` may not be granted.

    `confirmed_count` must exclude the requesting guest, so a guest repeating YES
    is never counted against the ceiling. Only YES is subject to admission.
    """
    if desired_status != GuestStatus.YES:
        return

    if enforce_deadline and is_deadline_passed(event.rsvp_deadline, now):
        logger.info("RSVP rejected for event %s: deadline %s passed", event.id, event.rsvp_deadline)
        raise RSVPDeadlinePassedError(event.id, event.rsvp_deadline)

    if not has_free_slot(confirmed_count, event.max_capacity):
        logger.info(
            "RSVP rejected for event %s: at capacity (%s/%s)",
            event.id,
            confirmed_count,
            event.max_capacity,
        )
        raise CapacityExceededError(event.id, event.max_capacity)


class EventLocks:
    """Registry of asyncio locks, one per event.

    Locks are reference counted and dropped once nobody holds or waits on them, so
    the registry only ever contains events with admissions in flight.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._locks

    @contextlib.asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]


event_locks = EventLocks()
