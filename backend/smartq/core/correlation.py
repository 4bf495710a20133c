"""
Correlation ID support for request tracing.

- Context variable holding the correlation ID of the current request
- Middleware that reads or generates the ID and echoes it on the response
- Logging filter exposing it as %(correlation_id)s
"""
import uuid
import logging
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Takes the correlation ID from X-Correlation-ID or X-Request-ID, or
    generates one, and adds it to the response headers.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or
            request.headers.get(REQUEST_ID_HEADER) or
            generate_correlation_id()
        )
        token = _correlation_id.set(correlation_id)

        logger.debug(f"Request started: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        except Exception as e:
            logger.error(f"Request failed: {request.method} {request.url.path} error={e}")
            raise
        finally:
            _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """
    Adds the current correlation ID to log records ("-" outside a request).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
