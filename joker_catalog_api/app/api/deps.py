"""
FastAPI dependencies shared by the endpoints.

The :class:`DatasetCache` is created once per application by
``create_app`` and stored on ``app.state``; handlers receive the
current dataset through :func:`get_dataset` so each request works
against one snapshot.
"""

from fastapi import Depends, HTTPException, Request, status

from joker_catalog_api.app.core.errors import DatasetUnavailableError
from joker_catalog_api.app.services.cache import DatasetCache
from joker_catalog_api.app.services.loader import Dataset


def get_cache(request: Request) -> DatasetCache:
    return request.app.state.cache


def get_dataset(cache: DatasetCache = Depends(get_cache)) -> Dataset:
    try:
        return cache.get_dataset()
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
