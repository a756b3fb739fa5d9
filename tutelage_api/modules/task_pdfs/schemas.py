"""Pydantic schemas for task PDFs (camelCase on the wire)."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, TypeAdapter, ValidationError as PydanticValidationError, field_validator, model_validator

from tutelage_api.modules.task_pdfs.models import FILE_NAME_MAX_LENGTH, FILE_PATH_MAX_LENGTH
from tutelage_api.shared.schemas import CamelSchema

# task_pdfs.file_size is a 32-bit INTEGER column
FILE_SIZE_MAX = 2**31 - 1

_datetime_adapter = TypeAdapter(datetime)


def _coerce_file_size(value: Any) -> int | None:
    """Byte size as a positive int, or None when unknown."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = int(value) if value.is_integer() else None
    elif isinstance(value, str):
        text = value.strip()
        value = int(text) if text.isascii() and text.isdigit() else None
    elif not isinstance(value, int):
        value = None
    if value is None or value <= 0 or value > FILE_SIZE_MAX:
        return None
    return value


def _coerce_upload_date(value: Any) -> datetime | None:
    """Parsed timestamp, or None when missing or unparseable."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class TaskPdfCandidate(CamelSchema):
    """One entry of an incoming ``taskPdfs`` batch.

    Only ``filePath`` and ``fileName`` can make an entry invalid; a bad size
    or date is treated as absent.
    """

    file_path: str = Field(max_length=FILE_PATH_MAX_LENGTH)
    file_name: str = Field(max_length=FILE_NAME_MAX_LENGTH)
    file_size: int | None = None
    upload_date: datetime | None = None

    @field_validator("file_path", "file_name", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        if not isinstance(v, str) or not v:
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("file_size", mode="before")
    @classmethod
    def normalize_file_size(cls, v: Any) -> int | None:
        return _coerce_file_size(v)

    @field_validator("upload_date", mode="before")
    @classmethod
    def normalize_upload_date(cls, v: Any) -> datetime | None:
        return _coerce_upload_date(v)


class TaskPdfBatchCreate(CamelSchema):
    """Body of ``POST /task-pdfs/{resourceType}/{resourceId}``.

    Entries are kept raw here; ``TaskPdfService`` filters them one by one so a
    bad entry is dropped instead of failing the whole request.
    """

    task_pdfs: list[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def object_or_empty(cls, data: Any) -> Any:
        # Any JSON body other than an object is an empty batch
        return data if isinstance(data, (dict, cls)) else {}

    @field_validator("task_pdfs", mode="before")
    @classmethod
    def list_or_empty(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []


class TaskPdfResponse(CamelSchema):
    id: int
    resource_type: str
    resource_id: int
    file_path: str
    file_name: str
    file_size: int | None
    upload_date: datetime
    created_at: datetime
    updated_at: datetime
