from fastapi import APIRouter, Depends, status

from app.features.events.services.event_store import EventStore
from app.features.phones.services.phone_store import PhoneStore
from app.platform.dependencies import get_event_store, get_phone_store
from app.platform.response import api_response

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(
    event_store: EventStore = Depends(get_event_store),
    phone_store: PhoneStore = Depends(get_phone_store),
):
    return api_response(
        data={
            "status": "ok",
            "service": "Olimpico Live Installation",
            "components": {
                "event_store": {"events": len(event_store), "listeners": len(event_store.subscriptions)},
                "phone_store": {"phones": len(phone_store), "listeners": len(phone_store.subscriptions)},
            },
        },
        message="Service is healthy",
        status_code=status.HTTP_200_OK,
    )
