"""API error handling

ClientError carries a use-case Error to the HTTP boundary; the handlers
render every failure as {"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from libs.result import Error

logger = logging.getLogger(__name__)


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.error = error
        self.status_code = status_code
        super().__init__(error.message)


def create_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} - {exc.error.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error.code} - {exc.error.message}")
    return create_error_response(exc.status_code, exc.error.code, exc.error.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Validation error on {request.url.path}: {details}")
    return create_error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        f"Invalid request parameters: {details}",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return create_error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app):
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def status_code_for(error: Error) -> int:
    """HTTP status for a use-case error: 502 for the ERP, 500 for the remark store"""
    if error.code.startswith("ERP_"):
        return status.HTTP_502_BAD_GATEWAY
    if error.code in ("REMARKS_FETCH_FAILED", "REMARK_UPDATE_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST
