"""
Top‑level router for version 1 of the API.

This router aggregates the catalog routers under a unified prefix.
When new endpoints are added, update this file to include them.
"""

from fastapi import APIRouter

from .endpoints import jokers, taxonomies, status

router = APIRouter()

router.include_router(jokers.router, prefix="/jokers", tags=["jokers"])
# Taxonomy routes define their own paths (``/categories`` and ``/types``).
router.include_router(taxonomies.router, tags=["taxonomies"])
router.include_router(status.router, tags=["status"])
