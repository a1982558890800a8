"""Tests for joker filtering and pagination."""

import pytest

from joker_catalog_api.app.services.loader import load_dataset
from joker_catalog_api.app.services.query_service import (
    DEFAULT_LIMIT,
    QuerySpec,
    filter_jokers,
    parse_int,
    query_jokers,
)

from conftest import encode


@pytest.fixture
def two_jokers():
    return load_dataset(encode({"records": [{"id": 1, "name": "Joker"}, {"id": 2, "name": "Greedy Joker"}]}))


def test_name_filter_is_case_insensitive_substring(two_jokers):
    result = query_jokers(two_jokers, QuerySpec(name="joker"))

    assert result.total == 2
    assert [r["id"] for r in result.results] == [1, 2]


def test_second_page_of_size_one(two_jokers):
    result = query_jokers(two_jokers, QuerySpec(limit="1", page="2"))

    assert result.results == [{"id": 2, "name": "Greedy Joker"}]
    assert result.total == 2
    assert result.total_pages == 2
    assert result.page == 2


def test_no_filters_counts_every_record(dataset):
    result = query_jokers(dataset, QuerySpec())

    assert result.total == len(dataset.records)
    assert result.page == 1
    assert result.total_pages == 1


def test_category_filter_is_case_insensitive_exact(dataset):
    assert query_jokers(dataset, QuerySpec(category="rare")).total == 2
    assert query_jokers(dataset, QuerySpec(category="RAR")).total == 0


def test_type_filter_is_percent_decoded_and_exact(dataset):
    assert query_jokers(dataset, QuerySpec(type="%2Bm")).total == 3
    assert query_jokers(dataset, QuerySpec(type="+m")).total == 3
    assert query_jokers(dataset, QuerySpec(type="xm")).total == 0
    assert query_jokers(dataset, QuerySpec(type="%21%21")).total == 1


def test_malformed_percent_encoding_does_not_fail(dataset):
    assert query_jokers(dataset, QuerySpec(type="%E0%A4%A")).total == 0


def test_filters_are_conjunctive(dataset):
    result = query_jokers(dataset, QuerySpec(name="joker", category="common", type="+m"))

    assert [r["id"] for r in result.results] == [1, 2, 5]
    for record in result.results:
        assert "joker" in record["name"].lower()
        assert record["category"].lower() == "common"
        assert record["type"] == "+m"


def test_records_missing_filtered_field_never_match():
    dataset = load_dataset(encode({"records": [{"id": 1, "name": "Joker"}, {"id": 2, "name": "Baron", "category": None}]}))

    assert query_jokers(dataset, QuerySpec(category="common")).total == 0
    assert query_jokers(dataset, QuerySpec(type="+m")).total == 0


def test_filtered_results_are_subset_of_dataset(dataset):
    ids = {r["id"] for r in dataset.records}

    result = query_jokers(dataset, QuerySpec(name="o", limit="100"))

    assert {r["id"] for r in result.results} <= ids


@pytest.mark.parametrize("limit", [1, 2, 3, 4, 5, 7])
def test_pages_concatenate_to_filtered_set(dataset, limit):
    spec = QuerySpec(category="common", limit=str(limit))
    expected = filter_jokers(dataset.records, spec)
    first = query_jokers(dataset, spec)

    collected = []
    for page in range(1, first.total_pages + 1):
        spec.page = str(page)
        collected.extend(query_jokers(dataset, spec).results)

    assert collected == expected
    assert len({r["id"] for r in collected}) == len(collected)


@pytest.mark.parametrize("limit", [None, "", "abc", "0", "-3", "2.5"])
def test_invalid_limit_defaults_to_ten(limit):
    assert QuerySpec(limit=limit).resolved_limit() == DEFAULT_LIMIT


@pytest.mark.parametrize("page, expected", [(None, 1), ("x", 1), ("0", 1), ("-2", 1), ("3", 3)])
def test_page_resolution(page, expected):
    assert QuerySpec(page=page).resolved_page() == expected


def test_non_positive_page_returns_first_page(dataset):
    result = query_jokers(dataset, QuerySpec(limit="2", page="-1"))

    assert result.page == 1
    assert [r["id"] for r in result.results] == [1, 2]


def test_page_past_the_end_is_empty(dataset):
    result = query_jokers(dataset, QuerySpec(limit="2", page="50"))

    assert result.results == []
    assert result.total == 5
    assert result.total_pages == 3


def test_large_limit_is_not_capped(dataset):
    result = query_jokers(dataset, QuerySpec(limit="100000"))

    assert len(result.results) == 5
    assert result.total_pages == 1


def test_limit_beyond_float_range_gives_one_page(dataset):
    result = query_jokers(dataset, QuerySpec(limit="9" * 400))

    assert result.total == 5
    assert result.total_pages == 1
    assert len(result.results) == 5


def test_oversized_integer_literals_fall_back_to_defaults():
    huge = "9" * 5000

    assert parse_int(huge) is None
    assert QuerySpec(limit=huge).resolved_limit() == DEFAULT_LIMIT
    assert QuerySpec(page=huge).resolved_page() == 1


def test_no_matches_has_zero_pages(dataset):
    result = query_jokers(dataset, QuerySpec(name="nothing like this"))

    assert result.total == 0
    assert result.total_pages == 0
    assert result.results == []


def test_query_does_not_modify_dataset(dataset):
    before = list(dataset.records)

    query_jokers(dataset, QuerySpec(name="joker", limit="1"))

    assert list(dataset.records) == before


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), ("12", 12), (" 7 ", 7), ("-4", -4), ("+3", 3), ("12abc", None), ("1.0", None), (True, None), (None, None), (2.0, None)],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected
