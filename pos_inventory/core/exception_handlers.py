import logging
import traceback
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from pos_inventory.core.config import CORS_HEADERS
from pos_inventory.core.errors import InventoryServiceError, InvalidRequest

log = logging.getLogger("pos_inventory.errors")


def _error_response(status_code: int, message, **extra) -> JSONResponse:
    body = {"error": message, **extra}
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


# ----------- Exception Handlers (called by FastAPI) -----------

def service_exception_handler(request: Request, exc: InventoryServiceError):
    """Handles the service's own error taxonomy (400, 401, 404, 500)."""
    return _error_response(exc.status_code, exc.message)


def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g. unknown routes, 405)."""
    return _error_response(exc.status_code, exc.detail)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete request bodies are reported as 400 Missing required fields."""
    log.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return _error_response(InvalidRequest.status_code, InvalidRequest.default_message)


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.error(f"Unhandled exception on path: {request.url.path}\n{traceback.format_exc()}")
    return _error_response(500, "Internal server error")


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(InventoryServiceError, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
