"""
FastAPI dependency providers.

The stores are built once per application in `create_app()` and kept on
`app.state`; routes receive them through these providers instead of importing
module-level singletons.
"""
from fastapi import Request

from app.features.events.services.event_store import EventStore
from app.features.phones.services.phone_store import PhoneStore
from app.platform.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store


def get_phone_store(request: Request) -> PhoneStore:
    return request.app.state.phone_store
