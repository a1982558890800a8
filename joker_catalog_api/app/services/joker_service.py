"""
Narrow read operations over a loaded dataset.

``JokerService`` never touches the cache itself: the endpoints fetch
the current :class:`Dataset` once per request and pass it in, so a
request is answered from a single consistent snapshot even when a
reload happens concurrently.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

from joker_catalog_api.app.core.errors import (
    EmptyCatalogError,
    InvalidJokerIdError,
    JokerNotFoundError,
    TaxonomyUnavailableError,
)
from joker_catalog_api.app.services.loader import Dataset, Record
from joker_catalog_api.app.services.query_service import QueryResult, QuerySpec, parse_int, query_jokers


def _has_id(record: Record, joker_id: int) -> bool:
    value = record.get("id")
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == joker_id


class JokerService:
    """Read-only accessors for jokers and their taxonomy tables."""

    @classmethod
    def list_jokers(cls, dataset: Dataset, spec: QuerySpec) -> QueryResult:
        return query_jokers(dataset, spec)

    @classmethod
    def get_by_id(cls, dataset: Dataset, raw_id: Any) -> Record:
        """Return the joker whose numeric ``id`` equals ``raw_id``.

        ``InvalidJokerIdError`` is raised when ``raw_id`` is not an
        integer and ``JokerNotFoundError`` when it is valid but unknown.
        """
        joker_id = parse_int(raw_id)
        if joker_id is None:
            raise InvalidJokerIdError("The provided ID is not a valid number.")
        for record in dataset.records:
            if _has_id(record, joker_id):
                return record
        raise JokerNotFoundError(joker_id)

    @classmethod
    def get_random(cls, dataset: Dataset, rng: Optional[random.Random] = None) -> Record:
        """Return a uniformly chosen joker."""
        if not dataset.records:
            raise EmptyCatalogError("There are no jokers available at the moment.")
        return (rng or random).choice(dataset.records)

    @classmethod
    def get_categories(cls, dataset: Dataset) -> Dict[str, Any]:
        if dataset.categories is None:
            raise TaxonomyUnavailableError("categories")
        return dataset.categories

    @classmethod
    def get_types(cls, dataset: Dataset) -> Dict[str, Any]:
        if dataset.types is None:
            raise TaxonomyUnavailableError("types")
        return dataset.types
