import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

LOG = logging.getLogger("photo_quality.http")

REQUEST_FIELDS = ("request_id", "method", "path", "status", "duration_ms")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request; uploads are patient photos, so no bodies or headers."""

    async def dispatch(self, request: Request, call_next: Callable):
        rid = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        start = time.time()
        status = 500

        try:
            response: Response = await call_next(request)
            status = response.status_code
        finally:
            LOG.info(
                "request",
                extra={
                    "request_id": rid,
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "duration_ms": int((time.time() - start) * 1000),
                },
            )

        response.headers["X-Request-Id"] = rid
        return response

class _RequestFieldDefaults(logging.Filter):
    # pipeline and library records carry none of the access-line fields
    def filter(self, record: logging.LogRecord) -> bool:
        for name in REQUEST_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, "-")
        return True

def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(levelname)s %(name)s %(message)s | %(request_id)s %(method)s %(path)s %(status)s %(duration_ms)s",
    )
    defaults = _RequestFieldDefaults()
    for handler in logging.getLogger().handlers:
        handler.addFilter(defaults)
