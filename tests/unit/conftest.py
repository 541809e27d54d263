"""Pytest configuration and fixtures for unit tests."""

from datetime import UTC, date, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from carehub.core.config import settings
from carehub.core.db_client import RecordStore
from carehub.core.seed import seed_demo_data
from carehub.domain.create_models import HouseCreate, MemberCreate
from carehub.interface.deps import get_now, get_today
from carehub.main import API_ROUTERS, register_error_handlers
from carehub.services import house_service, member_service


# Sunday 2024-10-20, 10:00 UTC
NOW = datetime(2024, 10, 20, 10, 0, tzinfo=UTC)
TODAY = NOW.date()


@pytest.fixture(autouse=True)
def utc_timezone(monkeypatch):
    """Pin the configured timezone so calendar-day arithmetic is deterministic."""
    monkeypatch.setattr(settings, "timezone", "UTC")


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant."""
    return NOW


@pytest.fixture
def today() -> date:
    """Fixed reference calendar day."""
    return TODAY


@pytest.fixture
def store() -> RecordStore:
    """Provides a fresh, empty RecordStore for each test."""
    return RecordStore()


@pytest.fixture
async def seeded_store(store: RecordStore) -> RecordStore:
    """RecordStore loaded with the demo dataset relative to NOW."""
    await seed_demo_data(store, now=NOW)
    return store


@pytest.fixture
async def house(store: RecordStore):
    """An active house with room for two members."""
    return await house_service.create_house(
        store=store,
        data=HouseCreate(name="Cedar House", capacity=2, tags=["Sober Living"]),
    )


@pytest.fixture
async def archived_house(store: RecordStore):
    """A house that is out of service."""
    return await house_service.create_house(
        store=store,
        data=HouseCreate(name="Old Mill", capacity=4, status="archived"),
    )


@pytest.fixture
async def member(store: RecordStore, house):
    """An active member assigned to ``house``."""
    return await member_service.create_member(
        store=store,
        data=MemberCreate(full_name="Alex Rivera", email="alex@example.com", phone="555-0199", house_id=house.id),
    )


@pytest.fixture
def client(seeded_store: RecordStore) -> TestClient:
    """TestClient for the API routers over the seeded store with a pinned clock."""
    app = FastAPI()
    register_error_handlers(app)
    for router in API_ROUTERS:
        app.include_router(router)

    app.state.store = seeded_store
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_now] = lambda: NOW

    return TestClient(app)
