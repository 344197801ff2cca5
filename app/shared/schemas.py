from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Any


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseResponse(BaseModel):
    """Base response model."""

    success: bool = True
    message: Optional[str] = "Success"
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
