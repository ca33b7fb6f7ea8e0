import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTPException carrying an optional list of error details for the envelope."""

    default_status = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None, errors: list = None, status_code: int = None):
        super().__init__(status_code=status_code or self.default_status, detail=message or self.default_message)
        self.errors = errors or []


class BadRequest(ApiError):
    default_status = 400
    default_message = "Bad request"


class Unauthorized(ApiError):
    default_status = 401
    default_message = "Unauthorized request"


class Forbidden(ApiError):
    default_status = 403
    default_message = "You are not allowed to perform this action"


class NotFound(ApiError):
    default_status = 404
    default_message = "Resource not found"


class Conflict(ApiError):
    default_status = 409
    default_message = "Resource already exists"


class InternalError(ApiError):
    default_status = 500


def error_body(status_code: int, message: str, errors: list = None) -> dict:
    return {
        "statusCode": status_code,
        "data": None,
        "message": message,
        "success": False,
        "errors": errors or [],
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    errors = getattr(exc, "errors", [])
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.status_code, message, errors)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]) or err["loc"][0], "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(error_body(400, "Invalid request", errors)),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url)
    return JSONResponse(status_code=500, content=error_body(500, "Internal Server Error"))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
