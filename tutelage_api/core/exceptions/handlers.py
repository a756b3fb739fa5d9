import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from tutelage_api.core.exceptions import AppException
from tutelage_api.shared.schemas import ErrorResponse, ErrorDetail

logger = logging.getLogger(__name__)


def _render(status_code: int, response: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(exclude_none=True),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application exceptions."""
    if exc.message is None:
        # Deliberately detail-free (e.g. unknown parent resource)
        return _render(exc.status_code, ErrorResponse())

    field = exc.details.get("field")
    response = ErrorResponse(
        message=exc.message,
        errors=[ErrorDetail(field=field, message=exc.message)],
    )
    return _render(exc.status_code, response)


def _format_validation_errors(errors: list[dict]) -> list[ErrorDetail]:
    details: list[ErrorDetail] = []
    for error in errors:
        loc = error.get("loc", ())
        # Drop top-level "body" for cleaner field paths
        if loc and loc[0] == "body":
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) if loc else None
        details.append(ErrorDetail(field=field, message=error.get("msg", "Invalid value")))
    return details


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI validation errors."""
    response = ErrorResponse(
        message="Validation error",
        errors=_format_validation_errors(exc.errors()),
    )
    return _render(422, response)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle generic HTTP exceptions."""
    message = str(exc.detail) if exc.detail else "HTTP error"
    response = ErrorResponse(
        message=message,
        errors=[ErrorDetail(field=None, message=message)],
    )
    return _render(exc.status_code, response)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: 500 with the raw error text, no retry."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(500, ErrorResponse(message=str(exc) or exc.__class__.__name__))
