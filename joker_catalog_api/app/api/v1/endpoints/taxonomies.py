"""
Taxonomy endpoints for API v1.

The dataset ships two lookup tables: ``categories`` (rarities) and
``types`` (effect kinds), each mapping a name to its description.  They
are returned verbatim.  A dataset without the table yields 500, since
that is a data problem on the server side rather than a client error.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from joker_catalog_api.app.api.deps import get_dataset
from joker_catalog_api.app.core.errors import TaxonomyUnavailableError
from joker_catalog_api.app.schemas.joker import Taxonomy
from joker_catalog_api.app.services.joker_service import JokerService
from joker_catalog_api.app.services.loader import Dataset

router = APIRouter()


@router.get("/categories", response_model=Taxonomy)
async def list_categories(dataset: Dataset = Depends(get_dataset)) -> Taxonomy:
    """Return every joker category and its description."""
    try:
        return JokerService.get_categories(dataset)
    except TaxonomyUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e


@router.get("/types", response_model=Taxonomy)
async def list_types(dataset: Dataset = Depends(get_dataset)) -> Taxonomy:
    """Return every joker type and its description."""
    try:
        return JokerService.get_types(dataset)
    except TaxonomyUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
