from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.platform.exceptions import InvalidPayloadError

M = TypeVar("M", bound=BaseModel)


def validate_payload(model: Type[M], payload: Any, message: str = "Invalid payload") -> M:
    """
    Validate an ingest body against `model`.

    Raises:
        InvalidPayloadError: with pydantic's error list, before anything
            touches a store
    """
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidPayloadError(message, errors=_plain_errors(e))


def _plain_errors(error: ValidationError) -> list[Dict[str, Any]]:
    # ctx can hold exception instances that don't serialize
    return [
        {"loc": list(item["loc"]), "msg": item["msg"], "type": item["type"]}
        for item in error.errors()
    ]
