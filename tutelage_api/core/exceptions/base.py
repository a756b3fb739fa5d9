from typing import Any


class AppException(Exception):
    """Base application exception.

    ``message`` may be None for outcomes that deliberately carry no detail
    in the response body.
    """

    def __init__(
        self,
        message: str | None,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message or "")


class ResourceNotFoundError(AppException):
    """Parent resource or attachment does not exist (or was addressed with a malformed identifier).

    Rendered as a bare ``{"success": false}`` 404.
    """

    def __init__(self, *identifiers: Any):
        super().__init__(message=None, status_code=404, details={"identifiers": list(identifiers)})


class NoValidAttachmentsError(AppException):
    """Every candidate in an attachment batch was rejected."""

    def __init__(self, message: str = "No valid PDFs"):
        super().__init__(message=message, status_code=400, details={"field": "taskPdfs"})


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message, status_code=401)


class AuthorizationError(AppException):
    """Not authorized to perform action."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message=message, status_code=403)


class DuplicateError(AppException):
    """Duplicate resource."""

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} with {field}={value} already exists"
        super().__init__(message=message, status_code=409, details={"field": field, "value": value})
