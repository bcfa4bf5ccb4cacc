import contextlib
import os
from datetime import timedelta

# Must be set before invito.config is imported; the engine then points at test_invito.db
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./invito.db")
os.environ.setdefault("RESEND_API_KEY", "")

import pytest
from httpx import ASGITransport, AsyncClient

from invito.config.database import engine
from invito.events.features.create_event.write_model import SqlEventCreateWriteModel
from invito.events.repository import orm_models as event_models  # noqa: F401
from invito.guests.features.invite_guest.write_model import SqlGuestInviteWriteModel
from invito.guests.repository import orm_models as guest_models  # noqa: F401
from invito.main import app
from invito.models import BaseModel
from invito.utils_time import utc_now


@pytest.fixture(autouse=True)
async def db_schema():
    """Create a fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)


@pytest.fixture
def client_factory():
    """Build a test client with the given FastAPI dependency overrides."""

    @contextlib.asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


@pytest.fixture
def make_event():
    """Create an event in the test database."""

    async def factory(max_capacity: int = 2, rsvp_deadline=None, title: str = "Launch Party"):
        return await SqlEventCreateWriteModel().create_event(
            title=title,
            date=utc_now() + timedelta(days=30),
            max_capacity=max_capacity,
            rsvp_deadline=rsvp_deadline,
            location="Lisbon",
        )

    return factory


@pytest.fixture
def make_guest():
    """Invite a guest in the test database, without sending emails."""

    async def factory(event_id, name: str = "Ana Silva", email: str | None = None):
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        return await SqlGuestInviteWriteModel().invite_guest(
            event_id=event_id, name=name, email=email
        )

    return factory
