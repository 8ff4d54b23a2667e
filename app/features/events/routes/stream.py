"""
SSE endpoint for the installation view.

Pushes the aggregate installation state every time an event is recorded or the
installation is reset.
"""
from fastapi import APIRouter, Depends

from app.features.events.services.event_store import EventStore
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings, get_event_store
from app.platform.streaming import SubscriptionStream, event_source_response

router = APIRouter(tags=["stream"])


@router.get(
    "/stream",
    summary="Stream installation state (SSE)",
    description="""
    Long-lived Server-Sent Events connection carrying the aggregate state.

    **Message types** (each frame's `data` is one JSON object):
    - `connected`: first frame, includes an SSE `retry` of 3000 ms
    - `state`: `{activeUsers, languages, averageHour, averageMotion, motionCount, totalEvents}`
    - `ping`: keepalive, every 30 seconds by default

    **Client Usage (JavaScript):**
    ```javascript
    const source = new EventSource('/api/v1/stream');
    source.onmessage = (e) => {
        const msg = JSON.parse(e.data);
        if (msg.type === 'state') render(msg.data);
    };
    ```
    """,
)
async def stream_installation_state(
    event_store: EventStore = Depends(get_event_store),
    settings: Settings = Depends(get_app_settings),
):
    connection = SubscriptionStream(
        "events",
        subscribe=event_store.subscribe,
        keepalive_interval=settings.KEEPALIVE_INTERVAL_SECONDS,
        retry_ms=settings.STREAM_RETRY_MS,
        max_pending=settings.STREAM_MAX_PENDING,
    )
    return event_source_response(connection)
