from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import UserRegistryError, StorageError
from app.schemas.response import ErrorResponse
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(UserRegistryError)
    async def user_registry_exception_handler(request: Request, exc: UserRegistryError):
        if isinstance(exc, StorageError):
            logger.error(
                f"Storage failure: {exc.details or exc.message}",
                extra={"operation": f"{request.method} {request.url.path}"}
            )
        else:
            logger.info(
                f"Request rejected ({exc.code}): {exc.message}",
                extra={"operation": f"{request.method} {request.url.path}"}
            )
        # Storage details carry filesystem causes and stay server-side
        details = None if isinstance(exc, StorageError) else exc.details
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message, details=details).to_content()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).to_content(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles Pydantic validation errors (malformed body, non-integer id).
        """
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Input validation failed",
                details=jsonable_encoder(exc.errors())
            ).to_content()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={"operation": f"{request.method} {request.url}"},
            exc_info=True
        )

        message = "An internal error occurred. Please try again later." if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=message).to_content()
        )
