"""Request logging middleware."""

import json
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from restaurant_mock.models import utc_timestamp

logger = logging.getLogger(__name__)


def format_body(body: bytes) -> str | None:
    """Render a request body for the log, or None if there is nothing to show.

    JSON bodies are pretty-printed; anything else is logged as text.
    """
    if not body.strip():
        return None
    try:
        parsed = json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")
    if not parsed and isinstance(parsed, (dict, list)):
        return None
    return json.dumps(parsed, indent=2, ensure_ascii=False)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, headers and body of every inbound request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.info(f"🔍 [{utc_timestamp()}] {request.method} {request.url.path}")
        logger.info(f"📋 Headers: {json.dumps(dict(request.headers), indent=2)}")

        body = format_body(await request.body())
        if body is not None:
            logger.info(f"📦 Body: {body}")

        return await call_next(request)
