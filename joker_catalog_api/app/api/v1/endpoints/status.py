"""
Service introspection endpoints for API v1.

``/health`` reports process uptime and the state of the dataset cache,
including whether the last reload failed and stale data is being
served.  ``/status`` summarises the dataset that is currently live.
Both go through the cache, so they also trigger a reload when the
snapshot has expired.
"""

import sys
import time
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request

from joker_catalog_api.app.api.deps import get_cache, get_dataset
from joker_catalog_api.app.schemas.status import ApiStatus, HealthStatus
from joker_catalog_api.app.services.cache import DatasetCache
from joker_catalog_api.app.services.loader import Dataset

router = APIRouter()

ENDPOINTS = [
    "GET /",
    "GET /api/v1/jokers",
    "GET /api/v1/jokers/{joker_id}",
    "GET /api/v1/jokers/random",
    "GET /api/v1/categories",
    "GET /api/v1/types",
    "GET /api/v1/health",
    "GET /api/v1/status",
]


def _memory_usage() -> Optional[Dict[str, int]]:
    """Peak resident set size of the process, where the platform reports it."""
    try:
        import resource
    except ImportError:
        # Not available on Windows.
        return None
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes.
    scale = 1 if sys.platform == "darwin" else 1024
    return {"max_rss_bytes": int(max_rss) * scale}


@router.get("/health", response_model=HealthStatus)
async def health(
    request: Request,
    cache: DatasetCache = Depends(get_cache),
    dataset: Dataset = Depends(get_dataset),
) -> HealthStatus:
    age = cache.age()
    return HealthStatus(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        version=dataset.version,
        total_jokers=len(dataset.records),
        dropped_jokers=dataset.dropped,
        cache_age_seconds=round(age, 3) if age is not None else None,
        cache_ttl_seconds=cache.ttl,
        stale=cache.is_stale(),
        last_reload_error=str(cache.last_error) if cache.last_error else None,
        memory_usage=_memory_usage(),
        environment=request.app.state.settings.environment,
    )


@router.get("/status", response_model=ApiStatus)
async def api_status(dataset: Dataset = Depends(get_dataset)) -> ApiStatus:
    return ApiStatus(
        api_status="online",
        version=dataset.version,
        updated_at=dataset.updated_at,
        total_jokers=len(dataset.records),
        endpoints=ENDPOINTS,
    )
