"""
SSE endpoint for views that draw every phone (canvas / SVG layers).

Phones report every ~100 ms each, so this stream does not react to individual
updates: it reads the whole store on a fixed cadence and sends that.
"""
from fastapi import APIRouter, Depends

from app.features.phones.services.phone_store import PhoneStore
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings, get_phone_store
from app.platform.streaming import PollingStream, event_source_response

router = APIRouter(prefix="/phone", tags=["stream"])


@router.get(
    "/stream",
    summary="Stream connected phones (SSE)",
    description="""
    Sends `{type: "state", data: {phones, activeCount, total}}` every
    PHONE_POLL_INTERVAL_SECONDS (100 ms by default), after an initial
    `connected` frame. `ping` keepalives are sent as on /stream.
    """,
)
async def stream_phones(
    phone_store: PhoneStore = Depends(get_phone_store),
    settings: Settings = Depends(get_app_settings),
):
    connection = PollingStream(
        "phones",
        read=phone_store.snapshot,
        poll_interval=settings.PHONE_POLL_INTERVAL_SECONDS,
        keepalive_interval=settings.KEEPALIVE_INTERVAL_SECONDS,
        retry_ms=settings.STREAM_RETRY_MS,
        max_pending=settings.STREAM_MAX_PENDING,
    )
    return event_source_response(connection)
