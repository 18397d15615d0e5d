"""FastAPI mock server that receives and echoes restaurant records.

Used while building n8n workflows: the workflow posts scraped restaurants to
``/restaurants`` and the developer inspects what arrived through
``/api/restaurants`` and ``/stats``.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_mock.config import Config, get_config, setup_logging
from restaurant_mock.errors import (
    InternalError,
    InvalidPayloadError,
    MockAPIError,
    NotFoundError,
    SimulatedError,
    ValidationError,
)
from restaurant_mock.middleware import RequestLoggingMiddleware
from restaurant_mock.models import (
    CreateRestaurantResponse,
    RestaurantEcho,
    RestaurantListResponse,
    StatsResponse,
    missing_required_fields,
    utc_timestamp,
)
from restaurant_mock.services import RestaurantStore, format_summary

logger = logging.getLogger(__name__)

STATS_ENDPOINTS = [
    "POST /restaurants - Receive restaurant data",
    "POST /restaurants/error - Simulate error",
    "GET /api/restaurants - Get all received restaurants",
    "GET /stats - This endpoint",
]

router = APIRouter()


def get_store(request: Request) -> RestaurantStore:
    """Dependency to get the restaurant store from app state."""
    return request.app.state.store


def is_json_content_type(content_type: str) -> bool:
    """Check for ``application/json`` or an ``application/*+json`` media type."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


async def read_payload(request: Request, timestamp: str) -> Any:
    """Decode a JSON request body.

    Bodies sent with a non-JSON content type are ignored, as are empty ones.
    ``NaN`` and ``Infinity`` are not JSON and are rejected.

    Args:
        request: FastAPI request object
        timestamp: Timestamp to attach to a decoding error

    Returns:
        Decoded body, or an empty dict when there is no JSON body

    Raises:
        InvalidPayloadError: If the body is not valid JSON
    """
    if not is_json_content_type(request.headers.get("content-type", "")):
        return {}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning(f"❌ Invalid JSON payload: {e}")
        raise InvalidPayloadError(str(e), timestamp=timestamp) from e


@router.post("/restaurants")
async def create_restaurant(
    request: Request, store: RestaurantStore = Depends(get_store)
):
    """Receive a restaurant submission.

    Request body:
        {
            "title": "Chez Marcel",
            "address": "12 rue des Lilas",
            "city": "Lyon",
            ...any other fields, stored verbatim
        }
    """
    timestamp = utc_timestamp()
    payload = await read_payload(request, timestamp)

    missing = missing_required_fields(payload)
    if missing:
        logger.warning(f"❌ Missing fields: {', '.join(missing)}")
        raise ValidationError(missing, timestamp=timestamp)

    try:
        record = store.add(payload, received_at=timestamp)

        logger.info("✅ Restaurant received:\n" + "\n".join(format_summary(record)))

        response = CreateRestaurantResponse(
            id=record.id,
            processed_at=timestamp,
            total_received=store.count(),
            data=RestaurantEcho(title=record.title, city=record.city),
        )
    except Exception as e:
        logger.exception("❌ Error while processing restaurant")
        raise InternalError(str(e), timestamp=timestamp) from e

    logger.info("✅ Response sent: 200 OK")
    return response


@router.post("/restaurants/error")
async def simulate_error():
    """Always fail, so callers can test their error handling."""
    logger.info("🔥 Error simulation requested")
    raise SimulatedError()


@router.get("/api/restaurants")
async def list_restaurants(store: RestaurantStore = Depends(get_store)):
    """Return every received restaurant, most recent first."""
    restaurants = store.list_recent()
    return RestaurantListResponse(total=len(restaurants), restaurants=restaurants)


@router.get("/stats")
async def stats(request: Request, store: RestaurantStore = Depends(get_store)):
    """Report server identity, uptime and how many restaurants arrived."""
    return StatsResponse(
        server=request.app.state.config.server_name,
        uptime=time.monotonic() - request.app.state.started_at,
        timestamp=utc_timestamp(),
        total_restaurants_received=store.count(),
        endpoints=STATS_ENDPOINTS,
    )


async def mock_api_error_handler(_request: Request, exc: MockAPIError) -> JSONResponse:
    """Render a MockAPIError as its JSON error body."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Turn unmatched routes into the 404 fallback body.

    A known path with an unsupported method counts as unmatched.
    """
    if exc.status_code not in (404, 405):
        return await http_exception_handler(request, exc)

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    logger.info(f"❓ Route not found: {request.method} {path}")

    return await mock_api_error_handler(request, NotFoundError())


def _log_banner(cfg: Config) -> None:
    logger.info("🚀 Restaurant mock API started!")
    logger.info("📡 Server reachable at:")
    logger.info(f"   - Local: http://localhost:{cfg.server_port}")
    logger.info(f"   - Network: {cfg.public_url or 'NOT CONFIGURED'}")
    logger.info("📋 Available endpoints:")
    for endpoint in STATS_ENDPOINTS:
        logger.info(f"   {endpoint}")
    logger.info("⚡ Waiting for requests from your n8n workflow...")


def create_app(store: RestaurantStore | None = None, cfg: Config | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store owned by this application (a new empty one if omitted)
        cfg: Configuration (the global one if omitted)

    Returns:
        A configured FastAPI instance
    """
    if cfg is None:
        cfg = get_config()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Application lifespan manager."""
        _log_banner(cfg)
        yield
        logger.info("🛑 Shutting down server...")

    app = FastAPI(
        title="Restaurant Mock API",
        description="In-memory mock API for testing n8n restaurant workflows",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.store = store if store is not None else RestaurantStore()
    app.state.config = cfg
    app.state.started_at = time.monotonic()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(MockAPIError, mock_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.include_router(router)

    static_dir = Path(cfg.static_dir)
    if static_dir.is_dir():
        # Mounted after the API routes so they match first.
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="public")
        logger.debug(f"Serving static files from {static_dir.resolve()}")

    return app


app = create_app()


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server. Ctrl+C stops it; nothing
    received is kept.
    """
    setup_logging()

    config = get_config()

    uvicorn.run(
        "restaurant_mock.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
