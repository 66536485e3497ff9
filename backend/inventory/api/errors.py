"""
Перевод доменных ошибок и ошибок валидации в JSON-конверт
{"success": false, "message": ..., "errors": [...]}.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory.core.errors import InventoryError
from inventory.schemas.common import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

# Служебные части loc, которые клиенту не интересны
_LOC_PREFIXES = {"body", "query", "path"}


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    payload = ErrorResponse(message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOC_PREFIXES]
        errors.append(FieldError(field=".".join(loc), message=error.get("msg", "Invalid value")))

    return _error_response(400, "Validation failed", errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Something went wrong!")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
