"""Pytest configuration and fixtures."""

import copy
import json

import pytest
from fastapi.testclient import TestClient

from joker_catalog_api.app.core.config import Settings
from joker_catalog_api.app.main import create_app
from joker_catalog_api.app.services.cache import DatasetCache
from joker_catalog_api.app.services.loader import load_dataset

SAMPLE_DOCUMENT = {
    "meta": {"version": "2.1", "updated_at": "2025-05-20"},
    "categories": {"Common": "Frequent", "Rare": "Seldom"},
    "types": {"+m": "Adds mult", "Xm": "Multiplies mult"},
    "records": [
        {"id": 1, "name": "Joker", "category": "Common", "type": "+m", "cost": 2},
        {"id": 2, "name": "Greedy Joker", "category": "Common", "type": "+m", "cost": 5},
        {"id": 3, "name": "Baron", "category": "Rare", "type": "Xm", "cost": 8},
        {"id": 4, "name": "Blueprint", "category": "Rare", "type": "!!", "cost": 10},
        {"id": 5, "name": "Jolly Joker", "category": "Common", "type": "+m", "cost": 3},
    ],
}


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def encode(document) -> bytes:
    return json.dumps(document).encode("utf-8")


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def dataset(sample_document):
    return load_dataset(encode(sample_document))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        environment="test",
        data_file=str(tmp_path / "jokers.json"),
        rate_limit_window_seconds=0,
    )


def build_client(document, settings: Settings) -> TestClient:
    cache = DatasetCache(lambda: encode(document), ttl=settings.cache_ttl_seconds)
    return TestClient(create_app(settings, cache=cache))


@pytest.fixture
def client(sample_document, test_settings):
    """A started application serving ``SAMPLE_DOCUMENT``."""
    with build_client(sample_document, test_settings) as test_client:
        yield test_client
