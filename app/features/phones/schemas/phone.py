"""
Phone Schemas

Latest-known state of each connected phone. Ingest bodies declare every field
a phone may send; anything else is rejected.
"""
from typing import Optional, Tuple

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.platform.schemas import FrozenCamelModel


class Location(FrozenCamelModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy: float = Field(..., ge=0)


class Orientation(FrozenCamelModel):
    """DeviceOrientation reading, degrees."""
    alpha: Optional[float] = None
    beta: Optional[float] = None
    gamma: Optional[float] = None


class PhoneUpdate(FrozenCamelModel):
    """
    Body of POST /phone minus `id`.

    Every field is optional; only the fields present in a request replace the
    stored ones.
    """
    name: Optional[str] = None
    image: Optional[str] = None  # opaque, usually a base64 data URL
    user_agent: Optional[str] = None
    platform: Optional[str] = None
    language: Optional[str] = None
    screen_width: Optional[int] = Field(default=None, ge=0)
    screen_height: Optional[int] = Field(default=None, ge=0)
    location: Optional[Location] = None
    gyroscope: Optional[Orientation] = None
    frozen: Optional[bool] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Ana",
                "platform": "iPhone",
                "language": "es-AR",
                "screenWidth": 390,
                "screenHeight": 844,
                "gyroscope": {"alpha": 10.0, "beta": 5.0, "gamma": 0.0},
            }
        },
    )


class PhoneRecord(FrozenCamelModel):
    """Stored phone; replaced wholesale on every update except `first_seen`."""
    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    user_agent: Optional[str] = None
    platform: Optional[str] = None
    language: Optional[str] = None
    screen_width: Optional[int] = None
    screen_height: Optional[int] = None
    location: Optional[Location] = None
    gyroscope: Optional[Orientation] = None
    frozen: Optional[bool] = None
    first_seen: int
    last_update: int


class PhoneSnapshot(FrozenCamelModel):
    phones: Tuple[PhoneRecord, ...] = ()
    active_count: int = 0
    total: int = 0


class PhoneUpsertResult(FrozenCamelModel):
    success: bool = True
    id: str
    created: bool
