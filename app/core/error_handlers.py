# app/core/error_handlers.py
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import APIError, InternalError, ValidationError
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def error_body(error_code: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    response = ErrorResponse(error_code=error_code, message=message, details=jsonable_encoder(details))
    return response.model_dump(mode="json", by_alias=True)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers"""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error_code, str(exc.detail), exc.details),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", ValidationError.default_detail))
        return JSONResponse(
            status_code=ValidationError.status_code,
            content=error_body(ValidationError.error_code, message, errors),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("HTTP_ERROR", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=InternalError.status_code,
            content=error_body(InternalError.error_code, "Database operation failed"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=InternalError.status_code,
            content=error_body(InternalError.error_code, InternalError.default_detail),
        )
