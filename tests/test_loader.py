"""Tests for dataset loading and record validation."""

import logging

import pytest

from joker_catalog_api.app.core.errors import DatasetParseError, DatasetSchemaError, DatasetSourceError
from joker_catalog_api.app.services.loader import is_valid_record, load_dataset, read_source

from conftest import encode


def test_load_keeps_records_in_source_order(sample_document):
    dataset = load_dataset(encode(sample_document))

    assert [r["id"] for r in dataset.records] == [1, 2, 3, 4, 5]
    assert dataset.records[0] == sample_document["records"][0]
    assert dataset.dropped == 0


def test_load_exposes_metadata_and_taxonomies(sample_document):
    dataset = load_dataset(encode(sample_document))

    assert dataset.version == "2.1"
    assert dataset.updated_at == "2025-05-20"
    assert dataset.categories == {"Common": "Frequent", "Rare": "Seldom"}
    assert dataset.types == {"+m": "Adds mult", "Xm": "Multiplies mult"}


def test_load_drops_incomplete_records(caplog):
    document = {
        "records": [
            {"id": 1, "name": "Joker"},
            {"id": 2},
            {"name": "Nameless"},
            {"id": 0, "name": "Zero"},
            {"id": 3, "name": ""},
            {"id": None, "name": "Null"},
            "not a record",
            {"id": 4, "name": "Baron"},
        ]
    }

    with caplog.at_level(logging.WARNING):
        dataset = load_dataset(encode(document))

    assert [r["id"] for r in dataset.records] == [1, 4]
    assert dataset.dropped == 6
    assert "6 jokers were removed" in caplog.text


def test_every_loaded_record_has_id_and_name():
    document = {"records": [{"id": i, "name": f"J{i}" if i % 3 else ""} for i in range(20)]}

    dataset = load_dataset(encode(document))

    assert dataset.records
    assert all(r["id"] and r["name"] for r in dataset.records)


def test_load_defaults_when_metadata_and_taxonomies_missing():
    dataset = load_dataset(encode({"records": [{"id": 1, "name": "Joker"}]}))

    assert dataset.meta == {}
    assert dataset.version == "1.0"
    assert dataset.updated_at == "N/A"
    assert dataset.categories is None
    assert dataset.types is None


def test_load_ignores_non_mapping_taxonomies():
    dataset = load_dataset(encode({"records": [], "categories": ["Common"], "types": "Xm"}))

    assert dataset.categories is None
    assert dataset.types is None


def test_load_accepts_utf8_bom():
    source = "\ufeff".encode("utf-8") + encode({"records": [{"id": 1, "name": "Joker"}]})

    assert len(load_dataset(source).records) == 1


@pytest.mark.parametrize("source", [b"{not json", b"", b"\xff\xfe\x00"])
def test_load_rejects_invalid_json(source):
    with pytest.raises(DatasetParseError):
        load_dataset(source)


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"records": {"id": 1, "name": "Joker"}},
        {"records": None},
        [{"id": 1, "name": "Joker"}],
    ],
)
def test_load_rejects_documents_without_records_list(document):
    with pytest.raises(DatasetSchemaError, match="records"):
        load_dataset(encode(document))


def test_is_valid_record_follows_truthiness():
    assert is_valid_record({"id": 7, "name": "Joker"})
    assert is_valid_record({"id": "a1", "name": "Joker"})
    assert not is_valid_record({"id": False, "name": "Joker"})
    assert not is_valid_record(["id", "name"])


def test_read_source_reads_bytes(tmp_path):
    path = tmp_path / "jokers.json"
    path.write_bytes(b'{"records": []}')

    assert read_source(path) == b'{"records": []}'


def test_read_source_missing_file(tmp_path):
    with pytest.raises(DatasetSourceError):
        read_source(tmp_path / "missing.json")
