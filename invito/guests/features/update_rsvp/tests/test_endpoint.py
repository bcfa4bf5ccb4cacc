from datetime import timedelta

import pytest

from invito.config.database import TransientStoreError
from invito.config.settings import settings
from invito.guests.dtos import GuestStatus
from invito.guests.features.update_rsvp.router import get_rsvp_write_model
from invito.guests.repository.write_models import SqlRSVPWriteModel
from invito.guests.tests.inmemory_models import (
    InMemoryRSVPWriteModel,
    InMemoryStore,
    RaisingRSVPWriteModel,
    SlowRSVPWriteModel,
    create_test_event,
    create_test_guest,
)
from invito.guests.urls import UPDATE_RSVP_URL
from invito.utils_time import utc_now


@pytest.fixture
def test_event():
    return create_test_event(max_capacity=1)


@pytest.fixture
def store(test_event):
    """One confirmed guest and one undecided guest for a single-seat event."""
    return InMemoryStore(
        events=[test_event],
        guests=[
            create_test_guest(test_event, invite_code="AAAAAA", status=GuestStatus.YES),
            create_test_guest(test_event, invite_code="BBBBBB", name="Bruno", email="b@x.com"),
        ],
    )


@pytest.fixture
def overrides(store):
    return {get_rsvp_write_model: lambda: InMemoryRSVPWriteModel(store)}


@pytest.mark.asyncio
async def test_submit_rsvp_success(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(UPDATE_RSVP_URL, json={"inviteCode": "BBBBBB", "status": "NO"})

    assert response.status_code == 200
    data = response.json()
    assert data["inviteCode"] == "BBBBBB"
    assert data["status"] == "NO"
    assert data["name"] == "Bruno"
    assert "eventId" in data


@pytest.mark.asyncio
async def test_repeat_yes_from_confirmed_guest(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "AAAAAA", "status": "YES"}
        )

    assert response.status_code == 200
    assert response.json()["status"] == "YES"


@pytest.mark.asyncio
async def test_submit_rsvp_when_full(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "BBBBBB", "status": "YES"}
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "Maximum capacity reached"


@pytest.mark.asyncio
async def test_submit_rsvp_after_deadline(client_factory):
    event = create_test_event(max_capacity=5, rsvp_deadline=utc_now() - timedelta(hours=1))
    store = InMemoryStore(events=[event], guests=[create_test_guest(event, invite_code="LATE01")])
    overrides = {get_rsvp_write_model: lambda: InMemoryRSVPWriteModel(store)}

    async with client_factory(overrides) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "LATE01", "status": "YES"}
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "The RSVP deadline has passed"


@pytest.mark.asyncio
async def test_submit_rsvp_unknown_code(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "ZZZZZZ", "status": "YES"}
        )

    assert response.status_code == 404
    assert response.json()["detail"] == "Invalid or expired invite code"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"inviteCode": "BBBBBB", "status": "PENDING"},
        {"inviteCode": "BBBBBB", "status": "SOMETIMES"},
        {"inviteCode": "BBBBBB"},
        {"status": "YES"},
        {"inviteCode": "", "status": "YES"},
    ],
)
async def test_submit_rsvp_invalid_payload(client_factory, overrides, payload):
    async with client_factory(overrides) as client:
        response = await client.post(UPDATE_RSVP_URL, json=payload)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_rsvp_store_unavailable(client_factory):
    write_model = RaisingRSVPWriteModel(TransientStoreError("database is locked"))

    async with client_factory({get_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "BBBBBB", "status": "YES"}
        )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_submit_rsvp_times_out(client_factory, monkeypatch):
    monkeypatch.setattr(settings, "admission_timeout_seconds", 0.05)

    async with client_factory({get_rsvp_write_model: lambda: SlowRSVPWriteModel()}) as client:
        response = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": "BBBBBB", "status": "YES"}
        )

    assert response.status_code == 503
    assert response.json()["detail"] == "Service temporarily unavailable, please try again"


@pytest.mark.asyncio
async def test_submit_rsvp_against_database(client_factory, make_event, make_guest):
    event = await make_event(max_capacity=1)
    a = await make_guest(event.id, name="Guest A")
    b = await make_guest(event.id, name="Guest B")

    async with client_factory({get_rsvp_write_model: lambda: SqlRSVPWriteModel()}) as client:
        first = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": a.invite_code, "status": "YES"}
        )
        second = await client.post(
            UPDATE_RSVP_URL, json={"inviteCode": b.invite_code, "status": "YES"}
        )

    assert first.status_code == 200
    assert second.status_code == 400
