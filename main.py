import uvicorn

from app.main import app, create_app
from app.platform.config import get_settings

__all__ = ["app", "create_app"]


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().PORT)
