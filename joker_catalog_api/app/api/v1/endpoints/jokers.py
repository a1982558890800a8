"""
Joker endpoints for API v1.

``GET /jokers`` lists jokers with optional filters and pagination.
Paging parameters are accepted as raw strings: malformed values fall
back to their defaults instead of producing validation errors.
``GET /jokers/random`` and ``GET /jokers/{joker_id}`` return a single
joker.  The random route is declared first so ``random`` is never
interpreted as an id.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from joker_catalog_api.app.api.deps import get_dataset
from joker_catalog_api.app.core.errors import EmptyCatalogError, InvalidJokerIdError, JokerNotFoundError
from joker_catalog_api.app.schemas.joker import JokerPage, JokerRead
from joker_catalog_api.app.services.joker_service import JokerService
from joker_catalog_api.app.services.loader import Dataset
from joker_catalog_api.app.services.query_service import QuerySpec

router = APIRouter()


@router.get("", response_model=JokerPage)
async def list_jokers(
    name: Optional[str] = Query(None, description="Filter by part of the joker name."),
    category: Optional[str] = Query(None, description="Filter by rarity (Common, Uncommon, Rare, Legendary)."),
    type: Optional[str] = Query(None, description="Filter by effect type (+c, +m, Xm, ...)."),
    limit: Optional[str] = Query(None, description="Results per page (default 10)."),
    page: Optional[str] = Query(None, description="Page number (default 1)."),
    dataset: Dataset = Depends(get_dataset),
) -> JokerPage:
    """Return a filtered, paginated list of jokers."""
    spec = QuerySpec(name=name, category=category, type=type, limit=limit, page=page)
    result = JokerService.list_jokers(dataset, spec)
    return JokerPage(
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
        results=result.results,
    )


@router.get("/random", response_model=JokerRead)
async def get_random_joker(dataset: Dataset = Depends(get_dataset)) -> Dict[str, Any]:
    """Return a random joker, or 503 when the catalog is empty."""
    try:
        return JokerService.get_random(dataset)
    except EmptyCatalogError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


@router.get("/{joker_id}", response_model=JokerRead)
async def get_joker(joker_id: str, dataset: Dataset = Depends(get_dataset)) -> Dict[str, Any]:
    """Retrieve a single joker by its numeric ID.

    Returns 400 when the ID is not a number and 404 when no joker has it.
    """
    try:
        return JokerService.get_by_id(dataset, joker_id)
    except InvalidJokerIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except JokerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
