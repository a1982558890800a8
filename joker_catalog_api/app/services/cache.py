"""
Time-to-live cache around the dataset loader.

Exactly one :class:`Snapshot` is live at a time.  Readers fetch it
without locking; when it is missing or older than the TTL the next
caller reloads the source under a lock and publishes a fresh snapshot
with a single attribute assignment, so readers in flight keep working
against the dataset they already hold.

A failed reload never discards data: the previous snapshot keeps
being served (and the failure logged) until the source becomes
readable again.  Only a failure of the very first load is fatal.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from joker_catalog_api.app.core.errors import DatasetLoadError, DatasetUnavailableError
from joker_catalog_api.app.services.loader import Dataset, load_dataset, read_source

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class Snapshot:
    dataset: Dataset
    loaded_at: float


class DatasetCache:
    """Lazily refreshed holder of the current :class:`Dataset`.

    Parameters
    ----------
    reader : Callable[[], bytes]
        Returns the raw bytes of the source.  May raise
        ``DatasetLoadError``.
    ttl : float
        Maximum snapshot age in seconds before a reload is attempted.
    clock : Callable[[], float]
        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        reader: Callable[[], bytes],
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._reader = reader
        self._ttl = float(ttl)
        self._clock = clock
        self._snapshot: Optional[Snapshot] = None
        self._refresh_lock = threading.Lock()
        self.last_error: Optional[DatasetLoadError] = None

    @classmethod
    def from_path(cls, path: Path, ttl: float = DEFAULT_TTL_SECONDS) -> "DatasetCache":
        source = Path(path)
        return cls(lambda: read_source(source), ttl=ttl)

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    def age(self) -> Optional[float]:
        """Seconds since the live snapshot was loaded, or ``None``."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return self._clock() - snapshot.loaded_at

    def is_stale(self) -> bool:
        """``True`` when the last reload attempt failed and old data is served."""
        return self.last_error is not None and self._snapshot is not None

    def invalidate(self) -> None:
        """Force a reload on the next access, keeping the current data as fallback."""
        snapshot = self._snapshot
        if snapshot is not None:
            self._snapshot = Snapshot(snapshot.dataset, snapshot.loaded_at - self._ttl - 1.0)

    def _is_fresh(self, snapshot: Optional[Snapshot]) -> bool:
        return snapshot is not None and self._clock() - snapshot.loaded_at <= self._ttl

    def get_dataset(self) -> Dataset:
        """Return the current dataset, reloading it first when expired.

        Raises
        ------
        DatasetUnavailableError
            The source could not be loaded and no earlier dataset exists.
        """
        snapshot = self._snapshot
        if self._is_fresh(snapshot):
            return snapshot.dataset

        with self._refresh_lock:
            # Another caller may have refreshed while we waited.
            snapshot = self._snapshot
            if self._is_fresh(snapshot):
                return snapshot.dataset
            return self._refresh(snapshot)

    def _refresh(self, previous: Optional[Snapshot]) -> Dataset:
        try:
            dataset = load_dataset(self._reader())
        except DatasetLoadError as exc:
            self.last_error = exc
            if previous is None:
                logger.error("Critical error loading the joker dataset: %s", exc)
                raise DatasetUnavailableError("The joker dataset could not be loaded.") from exc
            logger.warning("Error reloading the joker dataset, serving previous data: %s", exc)
            return previous.dataset

        self._snapshot = Snapshot(dataset, self._clock())
        self.last_error = None
        logger.info("Loaded %d jokers (version %s).", len(dataset.records), dataset.version)
        return dataset
