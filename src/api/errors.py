import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.errors import INVALID_IMAGE_MESSAGE, CollaboratorError, ScanError

logger = logging.getLogger(__name__)

SCAN_PATH_SUFFIXES = ("/scan", "/scan-ingredients")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_scan_error(request: Request, exc: ScanError) -> JSONResponse:
    if isinstance(exc, CollaboratorError):
        logger.error(f"Scan failed on {request.url.path}: {exc}")
    else:
        logger.info(f"Scan rejected on {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    if request.url.path.rstrip("/").endswith(SCAN_PATH_SUFFIXES):
        return _error_response(400, INVALID_IMAGE_MESSAGE)
    return await request_validation_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ScanError, handle_scan_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
