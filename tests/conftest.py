"""
Test configuration and fixtures for the installation API.

Every test gets its own application with freshly built stores and a
FrozenClock, so time-window behaviour can be driven explicitly.
"""

import os
from typing import Generator

# keep test runs from writing log files
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient

from app.features.events.services.event_store import EventStore
from app.features.phones.services.phone_store import PhoneStore
from app.main import create_app
from app.platform.clock import FrozenClock
from app.platform.config import Settings

# 2023-11-14T22:13:20Z
START_MS = 1_700_000_000_000
FIXED_HOUR = 12


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(start_ms=START_MS, hour=FIXED_HOUR)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        LOG_TO_FILE=False,
        NEXT_PUBLIC_BASE_URL=None,
        BASE_URL=None,
        VERCEL_URL=None,
        TUNNEL_URL=None,
        PORT=3000,
        FALLBACK_URL="http://localhost:3000",
    )


@pytest.fixture
def event_store(clock) -> EventStore:
    return EventStore(clock, ttl_seconds=300, active_window_seconds=120)


@pytest.fixture
def phone_store(clock) -> PhoneStore:
    return PhoneStore(clock, ttl_seconds=300, active_window_seconds=120)


@pytest.fixture
def test_app(settings, clock):
    """Create FastAPI test application."""
    return create_app(settings=settings, clock=clock)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    A clean TestClient and a clean pair of stores for each test function.
    """
    with TestClient(test_app) as test_client:
        yield test_client
