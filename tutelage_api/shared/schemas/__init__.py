from tutelage_api.shared.schemas.base import (
    AckResponse,
    BaseSchema,
    CamelSchema,
    SuccessResponse,
    ErrorResponse,
    ErrorDetail,
)

__all__ = [
    "AckResponse",
    "BaseSchema",
    "CamelSchema",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
]
