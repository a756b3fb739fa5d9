from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base Pydantic schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class CamelSchema(BaseSchema):
    """Schema exchanged with the frontend in camelCase (``filePath``, ``resourceId``...)."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ErrorDetail(BaseSchema):
    """Error detail for a specific field."""

    field: str | None = None
    message: str


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response wrapper."""

    success: bool = True
    data: T
    message: str | None = None


class AckResponse(BaseSchema):
    """Success acknowledgement without payload."""

    success: bool = True


class ErrorResponse(BaseSchema):
    """Standard error response wrapper.

    Dumped with ``exclude_none`` so a bare failure is just ``{"success": false}``.
    """

    success: bool = False
    message: str | None = None
    errors: list[ErrorDetail] | None = None
