from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from app.features.events.schemas.event import InstallationState, ScanEventIn
from app.features.events.services.event_store import EventStore
from app.platform.dependencies import get_event_store
from app.platform.logger import get_logger
from app.platform.response import api_response
from app.platform.schemas import APIResponse
from app.platform.utils.payload import validate_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def record_event(
    payload: Dict[str, Any] = Body(...),
    event_store: EventStore = Depends(get_event_store),
):
    """
    Record one scan from /scan.

    Body is validated before the store sees it; a rejected event leaves the
    installation state untouched.
    """
    event_in = validate_payload(ScanEventIn, payload, message="Invalid event data")
    event = event_store.record(event_in)

    logger.info(
        f"Event received: language={event.language} hour={event.hour} "
        f"device_type={event.device_type.value} motion={event.motion}"
    )

    return api_response(
        data={"success": True},
        message="Event recorded",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/state", response_model=APIResponse[InstallationState])
async def get_installation_state(event_store: EventStore = Depends(get_event_store)):
    return api_response(data=event_store.snapshot(), message="Installation state")
