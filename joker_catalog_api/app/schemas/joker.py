"""
Pydantic models for joker data.

A joker only guarantees an ``id`` and a ``name``; every other attribute
present in the source (``category``, ``type``, ``effect``, ``cost``
and so on) is carried through unchanged, which is why ``JokerRead``
allows extra fields and declares no optional ones.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class JokerRead(BaseModel):
    """Schema for a single joker returned by the API."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [{"id": 1, "name": "Joker", "category": "Common", "type": "+m", "effect": "+4 Mult"}]
        },
    )

    id: Any = Field(..., description="Unique numeric ID.")
    name: Any = Field(..., description="Display name.")


class JokerPage(BaseModel):
    """A page of jokers together with pagination metadata."""

    total: int
    page: int
    total_pages: int
    results: List[JokerRead]


Taxonomy = Dict[str, Any]
