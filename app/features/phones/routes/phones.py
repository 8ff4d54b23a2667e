from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.features.phones.schemas.phone import PhoneRecord, PhoneSnapshot, PhoneUpdate, PhoneUpsertResult
from app.features.phones.services.phone_store import PhoneStore, short_id
from app.platform.dependencies import get_phone_store
from app.platform.exceptions import InvalidPayloadError
from app.platform.logger import get_logger
from app.platform.response import api_response
from app.platform.schemas import APIResponse
from app.platform.utils.payload import validate_payload

logger = get_logger(__name__)

router = APIRouter(prefix="/phone", tags=["phones"])


@router.post("", response_model=APIResponse[PhoneUpsertResult])
async def upsert_phone(
    payload: Dict[str, Any] = Body(...),
    phone_store: PhoneStore = Depends(get_phone_store),
):
    """
    Add or update one phone. Phones post here every ~100 ms while connected.
    """
    payload = dict(payload)
    phone_id = payload.pop("id", None)
    if not isinstance(phone_id, str) or not phone_id.strip():
        raise InvalidPayloadError("Missing connection ID")

    update = validate_payload(PhoneUpdate, payload, message="Invalid phone data")
    record, created = phone_store.upsert(phone_id, update)

    logger.info(
        f"Phone {short_id(phone_id)} {'ADDED' if created else 'UPDATED'}. "
        f"Total: {len(phone_store)}, has_gyro={record.gyroscope is not None}"
    )

    return api_response(
        data=PhoneUpsertResult(id=phone_id, created=created),
        message="Phone added" if created else "Phone updated",
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
    )


@router.get("", response_model=APIResponse[PhoneSnapshot])
async def list_phones(phone_store: PhoneStore = Depends(get_phone_store)):
    return api_response(data=phone_store.snapshot(), message="Connected phones")


@router.get("/{phone_id}", response_model=APIResponse[PhoneRecord])
async def get_phone(phone_id: str, phone_store: PhoneStore = Depends(get_phone_store)):
    record = phone_store.get(phone_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phone not found")
    return api_response(data=record, message="Phone found")


@router.delete("/{phone_id}")
async def remove_phone(phone_id: str, phone_store: PhoneStore = Depends(get_phone_store)):
    if not phone_store.remove(phone_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phone not found")
    return api_response(data={"id": phone_id}, message="Phone removed")
