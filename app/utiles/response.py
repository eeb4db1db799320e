# app/utiles/response.py
"""
Uniform JSON envelope for every response, plus the exception handlers that
render errors into it.
"""
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, ServerError, ValidationError, violations_from_pydantic
from app.utiles.logger import get_logger

logger = get_logger(__name__)

_HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def send_response(status_code: int, message: str, data: Any = None) -> JSONResponse:
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(error: AppError) -> JSONResponse:
    content = {
        "success": False,
        "message": error.message,
        "error": error.error,
        "errorCode": error.error_code,
        "statusCode": error.status_code,
    }
    details = error.details()
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=error.status_code, content=jsonable_encoder(content))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.error)
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(violations_from_pydantic(exc.errors()))
    logger.warning("%s %s -> 400 %s", request.method, request.url.path, error.error)
    return error_response(error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = {
        "success": False,
        "message": str(exc.detail),
        "error": str(exc.detail),
        "errorCode": _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        "statusCode": exc.status_code,
    }
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(ServerError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
