"""
Scan Event Schemas

Ingest payload, stored event and the aggregate installation state pushed to
viewers.
"""
from enum import Enum
from typing import Optional, Tuple

from pydantic import ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from app.platform.schemas import CamelModel, FrozenCamelModel


class DeviceType(str, Enum):
    mobile = "mobile"
    tablet = "tablet"
    desktop = "desktop"


class ScanEventIn(CamelModel):
    """Body of POST /events."""
    language: str = Field(..., min_length=1)
    hour: StrictInt = Field(..., ge=0, le=23)
    device_type: DeviceType
    motion: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "language": "es-AR",
                "hour": 21,
                "deviceType": "mobile",
                "motion": 0.42,
            }
        },
    )

    @field_validator("language")
    @classmethod
    def language_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("language must not be blank")
        return value


class ScanEvent(FrozenCamelModel):
    """One scan, as kept in the event log. Never updated after creation."""
    id: str
    language: str
    hour: int
    device_type: DeviceType
    motion: Optional[float] = None
    timestamp: int


class InstallationState(FrozenCamelModel):
    """Aggregate statistics over the live event log."""
    active_users: int = 0
    languages: Tuple[str, ...] = ()
    average_hour: float
    average_motion: float = 0.0
    motion_count: int = 0
    total_events: int = 0
