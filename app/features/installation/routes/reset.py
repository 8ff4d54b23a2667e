from fastapi import APIRouter, Depends

from app.features.events.services.event_store import EventStore
from app.features.phones.services.phone_store import PhoneStore
from app.platform.dependencies import get_event_store, get_phone_store
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter(tags=["installation"])


@router.post("/reset")
async def reset_installation(
    event_store: EventStore = Depends(get_event_store),
    phone_store: PhoneStore = Depends(get_phone_store),
):
    """
    Clear every phone and scan event, e.g. between exhibition sessions.

    Destructive and immediate; connected viewers receive the baseline state.
    """
    phones_cleared = phone_store.clear()
    events_cleared = len(event_store)
    state = event_store.reset()

    logger.warning(f"Installation reset: {phones_cleared} phones and {events_cleared} events cleared")

    return api_response(
        data={
            "success": True,
            "phonesCleared": phones_cleared,
            "eventsCleared": events_cleared,
            "state": state,
        },
        message="All data reset successfully",
    )
