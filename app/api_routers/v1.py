from fastapi import APIRouter

from app.features.events.routes.events import router as events_router
from app.features.events.routes.stream import router as events_stream_router
from app.features.health.routes.health import router as health_router
from app.features.installation.routes.reset import router as reset_router
from app.features.installation.routes.server_url import router as server_url_router
from app.features.phones.routes.phones import router as phones_router
from app.features.phones.routes.stream import router as phones_stream_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(events_router)
api_router.include_router(events_stream_router)
# /phone/stream must be registered before /phone/{phone_id}
api_router.include_router(phones_stream_router)
api_router.include_router(phones_router)
api_router.include_router(reset_router)
api_router.include_router(server_url_router)
api_router.include_router(health_router)
