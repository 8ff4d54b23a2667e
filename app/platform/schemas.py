from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    status_code: int = 200
    status: str = "success"
    message: str
    data: T


class CamelModel(BaseModel):
    """Wire models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FrozenCamelModel(CamelModel):
    """Immutable wire model; stores hand these out without copying."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
