"""
Filtering and pagination over the in-memory joker collection.

Filters are conjunctive and all of them run before pagination:

* ``name`` – case-insensitive substring match on the joker name;
* ``category`` – case-insensitive exact match on ``category``;
* ``type`` – exact match on ``type`` after percent-decoding the input.

Malformed paging input never fails a request.  A missing, non-integer
or non-positive ``limit`` falls back to ``DEFAULT_LIMIT``; a missing
or non-integer ``page`` falls back to 1 and pages below 1 are clamped
to 1.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import unquote

from joker_catalog_api.app.services.loader import Dataset, Record

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1

_INT_RE = re.compile(r"[+-]?\d+")


def parse_int(value: Any) -> Optional[int]:
    """Return ``value`` as an ``int`` or ``None`` when it is not an integer literal."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # Longer than the interpreter's integer string conversion limit.
                return None
    return None


@dataclass
class QuerySpec:
    name: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    limit: Any = None
    page: Any = None

    def resolved_limit(self) -> int:
        limit = parse_int(self.limit)
        if limit is None or limit < 1:
            return DEFAULT_LIMIT
        return limit

    def resolved_page(self) -> int:
        page = parse_int(self.page)
        if page is None:
            return DEFAULT_PAGE
        return max(page, 1)


@dataclass
class QueryResult:
    total: int
    page: int
    total_pages: int
    results: List[Record]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def filter_jokers(records, spec: QuerySpec) -> List[Record]:
    """Return a new list with the records of ``records`` matching every filter."""
    items = list(records)

    if spec.name:
        needle = spec.name.lower()
        items = [r for r in items if needle in _text(r.get("name")).lower()]

    if spec.category:
        wanted = spec.category.lower()
        items = [
            r for r in items
            if r.get("category") is not None and _text(r.get("category")).lower() == wanted
        ]

    if spec.type:
        wanted_type = unquote(spec.type)
        items = [r for r in items if r.get("type") == wanted_type]

    return items


def query_jokers(dataset: Dataset, spec: QuerySpec) -> QueryResult:
    """Filter ``dataset`` by ``spec`` and cut out the requested page."""
    matches = filter_jokers(dataset.records, spec)
    total = len(matches)

    limit = spec.resolved_limit()
    page = spec.resolved_page()
    start = (page - 1) * limit

    return QueryResult(
        total=total,
        page=page,
        total_pages=-(-total // limit),
        results=matches[start:start + limit],
    )
