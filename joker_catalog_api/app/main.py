"""
Main entrypoint for the Joker Catalog API.

This module assembles the FastAPI application: it sets up logging,
builds the dataset cache, installs the security, CORS and rate
limiting middlewares and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn joker_catalog_api.app.main:app --reload

The dataset is loaded once during startup.  If that first load fails
the application refuses to start: serving requests without any data
is never an option.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.deps import get_dataset
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.rate_limit import FixedWindowRateLimiter, rate_limit_middleware
from .core.security import security_headers_middleware
from .services.cache import DatasetCache
from .services.loader import Dataset

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found. See the documentation at /"
INTERNAL_ERROR = "Internal server error."


def _describe_api(base_url: str, total: int, version: str) -> Dict[str, Any]:
    api = f"{base_url}/api/v1"
    return {
        "message": "Welcome to the Balatro Joker API!",
        "version": version,
        "total_jokers": total,
        "documentation": {
            "message": "For an interactive experience, open /docs or use a tool such as Postman.",
            "example_links": {
                "all_jokers": f"{api}/jokers",
                "specific_joker": f"{api}/jokers/10",
                "random_joker": f"{api}/jokers/random",
                "list_categories": f"{api}/categories",
                "list_types": f"{api}/types",
                "search_by_name": f"{api}/jokers?name=Greedy",
                "filter_by_category": f"{api}/jokers?category=Rare",
                "pagination": f"{api}/jokers?limit=5&page=2",
            },
        },
        "endpoints": {
            "List jokers": {
                "method": "GET",
                "path": "/api/v1/jokers",
                "description": "Returns a list of jokers with filters and pagination.",
                "parameters": [
                    {"name": "name", "type": "string", "description": "Filter by part of the joker name."},
                    {"name": "category", "type": "string", "description": "Filter by rarity (Common, Uncommon, Rare, Legendary)."},
                    {"name": "type", "type": "string", "description": "Filter by effect type (+c, +m, Xm, ...)."},
                    {"name": "limit", "type": "integer", "description": "Results per page (default: 10)."},
                    {"name": "page", "type": "integer", "description": "Page number (default: 1)."},
                ],
            },
            "Get joker by ID": {
                "method": "GET",
                "path": "/api/v1/jokers/{joker_id}",
                "description": "Returns a specific joker by its numeric ID.",
                "parameters": [{"name": "joker_id", "type": "integer", "description": "Unique joker ID."}],
            },
            "Get random joker": {
                "method": "GET",
                "path": "/api/v1/jokers/random",
                "description": "Returns a random joker.",
            },
            "List categories": {
                "method": "GET",
                "path": "/api/v1/categories",
                "description": "Returns every joker rarity and its description.",
            },
            "List types": {
                "method": "GET",
                "path": "/api/v1/types",
                "description": "Returns every joker type and its description.",
            },
        },
    }


def create_app(settings: Optional[Settings] = None, cache: Optional[DatasetCache] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        module-level settings.
    cache : Optional[DatasetCache]
        Pre-built dataset cache.  When omitted a cache over
        ``settings.data_file`` with ``settings.cache_ttl_seconds`` is
        created.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    if cache is None:
        cache = DatasetCache.from_path(Path(settings.data_file), ttl=settings.cache_ttl_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Raises DatasetUnavailableError when the source cannot be
        # loaded, which aborts startup.
        dataset = app.state.cache.get_dataset()
        logger.info("Joker API ready with %d valid jokers loaded.", len(dataset.records))
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.started_at = time.monotonic()

    # Middlewares run in reverse order of registration: CORS first, then
    # security headers, then the rate limiter.  Rate-limited responses
    # still receive the security headers.
    if settings.rate_limit_window_seconds > 0:
        limiter = FixedWindowRateLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds)
        app.middleware("http")(rate_limit_middleware(limiter))
    app.middleware("http")(security_headers_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return JSONResponse(status_code=exc.status_code, content={"detail": ROUTE_NOT_FOUND})
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": INTERNAL_ERROR})

    @app.get("/", tags=["root"])
    async def root(request: Request, dataset: Dataset = Depends(get_dataset)) -> Dict[str, Any]:
        """Describe the API and link to example requests."""
        base_url = str(request.base_url).rstrip("/")
        return _describe_api(base_url, len(dataset.records), dataset.version)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
