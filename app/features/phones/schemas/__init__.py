"""
Phone schemas package.
"""
from app.features.phones.schemas.phone import (
    Location,
    Orientation,
    PhoneRecord,
    PhoneSnapshot,
    PhoneUpdate,
    PhoneUpsertResult,
)

__all__ = ["Location", "Orientation", "PhoneRecord", "PhoneSnapshot", "PhoneUpdate", "PhoneUpsertResult"]
