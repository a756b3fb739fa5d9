from tutelage_api.core.exceptions.base import (
    AppException,
    ResourceNotFoundError,
    NoValidAttachmentsError,
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
)

__all__ = [
    "AppException",
    "ResourceNotFoundError",
    "NoValidAttachmentsError",
    "AuthenticationError",
    "AuthorizationError",
    "DuplicateError",
]
