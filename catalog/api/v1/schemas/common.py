"""Base schema and shared envelopes. JSON field names are camelCase."""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase input; emits camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class FieldErrorSchema(CamelModel):
    field: str
    message: str
    value: Optional[Any] = None


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    errors: List[FieldErrorSchema] = []
