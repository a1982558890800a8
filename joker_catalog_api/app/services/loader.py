"""
Dataset loading and validation.

``load_dataset`` turns the raw bytes of the JSON source into an
immutable :class:`Dataset`.  Jokers lacking an ``id`` or a ``name``
are dropped rather than rejected; the number of discarded entries is
logged and kept on the dataset so the health endpoint can report it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from joker_catalog_api.app.core.errors import (
    DatasetParseError,
    DatasetSchemaError,
    DatasetSourceError,
)

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


@dataclass(frozen=True)
class Dataset:
    """A fully loaded catalog: jokers plus metadata and taxonomy tables."""

    records: Tuple[Record, ...]
    meta: Dict[str, Any] = field(default_factory=dict)
    categories: Optional[Dict[str, Any]] = None
    types: Optional[Dict[str, Any]] = None
    dropped: int = 0

    @property
    def version(self) -> str:
        return str(self.meta.get("version") or "1.0")

    @property
    def updated_at(self) -> str:
        return str(self.meta.get("updated_at") or "N/A")


def is_valid_record(record: Any) -> bool:
    """Return ``True`` when ``record`` is an object with a truthy id and name."""
    return isinstance(record, dict) and bool(record.get("id")) and bool(record.get("name"))


def _optional_mapping(value: Any) -> Optional[Dict[str, Any]]:
    return dict(value) if isinstance(value, dict) else None


def load_dataset(source: bytes) -> Dataset:
    """Parse and validate ``source``.

    Raises
    ------
    DatasetParseError
        The bytes are not UTF‑8 encoded JSON.
    DatasetSchemaError
        The document is not an object with a list-valued ``records``.
    """
    try:
        document = json.loads(source.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DatasetParseError(f"Source is not valid JSON: {exc}") from exc

    if not isinstance(document, dict) or not isinstance(document.get("records"), list):
        raise DatasetSchemaError("The JSON source does not contain a valid 'records' array.")

    raw_records = document["records"]
    records = tuple(r for r in raw_records if is_valid_record(r))
    dropped = len(raw_records) - len(records)
    if dropped:
        logger.warning("%d jokers were removed because they are incomplete.", dropped)

    meta = document.get("meta")
    return Dataset(
        records=records,
        meta=dict(meta) if isinstance(meta, dict) else {},
        categories=_optional_mapping(document.get("categories")),
        types=_optional_mapping(document.get("types")),
        dropped=dropped,
    )


def read_source(path: Path) -> bytes:
    """Read the raw bytes of the dataset file."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DatasetSourceError(f"Unable to read {path}: {exc}") from exc
