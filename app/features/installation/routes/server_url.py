from fastapi import APIRouter, Depends

from app.features.installation.services.server_url import resolve_server_url
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings
from app.platform.response import api_response

router = APIRouter(tags=["installation"])


@router.get("/server-url")
async def get_server_url(settings: Settings = Depends(get_app_settings)):
    server_url = resolve_server_url(settings)
    return api_response(
        data={"url": server_url.url, "type": server_url.type, "scanUrl": server_url.scan_url},
        message="Server URL resolved",
    )
