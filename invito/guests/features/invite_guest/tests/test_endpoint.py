from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from invito.config.database import TransientStoreError
from invito.guests.dtos import InviteCodeExhaustedError
from invito.guests.features.invite_guest.router import get_guest_invite_write_model
from invito.guests.tests.inmemory_models import (
    InMemoryGuestInviteWriteModel,
    InMemoryStore,
    RaisingGuestInviteWriteModel,
    create_test_event,
)
from invito.guests.urls import INVITE_GUEST_URL


@pytest.fixture
def test_event():
    return create_test_event()


@pytest.fixture
def store(test_event):
    return InMemoryStore(events=[test_event])


@pytest.fixture
def overrides(store):
    return {get_guest_invite_write_model: lambda: InMemoryGuestInviteWriteModel(store)}


@pytest.mark.asyncio
async def test_invite_guest_success(client_factory, overrides, store, test_event):
    payload = {
        "name": "Ana Silva",
        "email": "ana@example.com",
        "title": "Dr.",
        "eventId": str(test_event.id),
    }

    async with client_factory(overrides) as client:
        response = await client.post(INVITE_GUEST_URL, json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ana Silva"
    assert data["title"] == "Dr."
    assert data["status"] == "PENDING"
    assert data["eventId"] == str(test_event.id)
    assert len(data["inviteCode"]) == 6
    assert len(store.guests) == 1


@pytest.mark.asyncio
async def test_invite_guest_unknown_event(client_factory, overrides):
    payload = {"name": "Ana", "email": "ana@example.com", "eventId": str(uuid4())}

    async with client_factory(overrides) as client:
        response = await client.post(INVITE_GUEST_URL, json=payload)

    assert response.status_code == 400
    assert "does not exist" in response.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Ana", "email": "not-an-email"},
        {"name": "", "email": "ana@example.com"},
        {"email": "ana@example.com"},
    ],
)
async def test_invite_guest_invalid_payload(client_factory, overrides, test_event, payload):
    async with client_factory(overrides) as client:
        response = await client.post(
            INVITE_GUEST_URL, json={**payload, "eventId": str(test_event.id)}
        )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        TransientStoreError("db down"),
        InviteCodeExhaustedError("no free invite code"),
        IntegrityError("INSERT INTO guests", {}, Exception("duplicate invite_code")),
    ],
)
async def test_invite_guest_store_unavailable(client_factory, test_event, error):
    write_model = RaisingGuestInviteWriteModel(error)
    payload = {"name": "Ana", "email": "ana@example.com", "eventId": str(test_event.id)}

    async with client_factory({get_guest_invite_write_model: lambda: write_model}) as client:
        response = await client.post(INVITE_GUEST_URL, json=payload)

    assert response.status_code == 503
