"""Translation of storefront errors into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.schemas import ErrorResponse, ErrorSchema
from storefront.errors import InvalidInput, NotFound, StorageFailure, StorefrontError

logger = structlog.get_logger(__name__)


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorSchema(kind=kind, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        return "; ".join(f"{field}: {', '.join(map(str, errs))}" for field, errs in messages.items())
    return str(messages)


async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, kind=exc.kind, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, kind=exc.kind, error=exc.message)
    return error_response(exc.status_code, exc.kind, exc.message)


async def handle_domain_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    message = f"Validation error: {_flatten(exc.messages)}"
    logger.info("Request rejected", path=request.url.path, kind=InvalidInput.kind, error=message)
    return error_response(InvalidInput.status_code, InvalidInput.kind, message)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", []) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    message = f"Validation error: {', '.join(parts)}"
    return error_response(InvalidInput.status_code, InvalidInput.kind, message)


async def handle_object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return error_response(NotFound.status_code, NotFound.kind, "Resource not found")


async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Storage error", path=request.url.path, error=str(exc))
    return error_response(StorageFailure.status_code, StorageFailure.kind, "Storage unavailable, please try again")


_HTTP_KINDS = {404: NotFound.kind, 405: "method_not_allowed"}


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, _HTTP_KINDS.get(exc.status_code, "http_error"), str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return error_response(500, "internal_error", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, handle_storefront_error)
    app.add_exception_handler(ValidationError, handle_domain_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_object_not_found)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
