"""
Global exception handlers and custom exception classes.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, status_code: int = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppException):
    """Malformed or out-of-range input field."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, field: str = None):
        super().__init__(detail)
        self.field = field


class NotFoundError(AppException):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class NoOpError(AppException):
    """Well-formed request that changes nothing."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppException):
    """Unique value already taken."""
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(AppException):
    """Credentials did not match."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class StoreError(AppException):
    """The database could not complete the operation."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"Request rejected on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Error response naming the first invalid location
    """
    errors = exc.errors()
    logger.warning(f"Validation error: {errors}")
    message = "Invalid request"
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
        message = f"Invalid {'.'.join(loc) or 'request body'}: {errors[0].get('msg', 'invalid value')}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render routing errors (unknown path, wrong method) in the error envelope.
    """
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None)
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Handler for database errors that no service wrapped in a StoreError.
    """
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database error"}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
