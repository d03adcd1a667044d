"""
Request logging middleware.

Every request gets an id (taken from an incoming X-Request-ID header when the
caller supplies one) that appears on each log line and is echoed back in the
response together with the handling time.
"""
import time
import logging
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# Set up logging
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log start, completion and failure of each request.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"[{request_id}] {route} from {client_host}")

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"[{request_id}] {route} failed after {time.perf_counter() - started:.4f}s: {str(e)}")
            raise

        elapsed = time.perf_counter() - started
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.6f}"
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(f"[{request_id}] {route} -> {response.status_code} in {elapsed:.4f}s")
        return response


def setup_middlewares(app):
    """
    Set up all custom middlewares for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestLoggingMiddleware)
