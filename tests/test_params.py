"""
Tests for search query serialization.

Ranges are AND-gated: a lone tempo or duration bound never reaches the query.
"""
from __future__ import annotations

import pytest

from melodies_mcp.params import SearchCriteria, serialize_search_params


def _keys(params):
    return [key for key, _ in params]


class TestScalarFields:
    def test_empty_criteria_serializes_to_nothing(self):
        assert serialize_search_params(SearchCriteria()) == []

    def test_scalars_emitted_in_order(self):
        criteria = SearchCriteria(q="piano", page=2, sort="latest", per_page=50)
        assert serialize_search_params(criteria) == [
            ("q", "piano"),
            ("page", 2),
            ("sort", "latest"),
            ("per_page", 50),
        ]

    def test_sort_is_passed_through_unchecked(self):
        params = serialize_search_params(SearchCriteria(sort="alphabetical"))
        assert params == [("sort", "alphabetical")]

    def test_per_page_is_not_clamped(self):
        params = serialize_search_params(SearchCriteria(per_page=500))
        assert params == [("per_page", 500)]

    def test_falsy_scalars_are_skipped(self):
        params = serialize_search_params(SearchCriteria(q="", page=0, per_page=0))
        assert params == []


class TestArrayFields:
    def test_each_element_becomes_bracketed_entry_in_order(self):
        params = serialize_search_params(SearchCriteria(genre=["a", "b", "c"]))
        assert params == [("genre[]", "a"), ("genre[]", "b"), ("genre[]", "c")]

    def test_empty_array_emits_nothing(self):
        params = serialize_search_params(SearchCriteria(mood=[]))
        assert "mood[]" not in _keys(params)

    def test_all_array_fields(self):
        criteria = SearchCriteria(
            genre=["jazz"],
            mood=["calm", "happy"],
            instrument=["piano"],
            purpose=["ads"],
        )
        assert serialize_search_params(criteria) == [
            ("genre[]", "jazz"),
            ("mood[]", "calm"),
            ("mood[]", "happy"),
            ("instrument[]", "piano"),
            ("purpose[]", "ads"),
        ]


class TestRangeGate:
    @pytest.mark.parametrize(
        "criteria",
        [
            SearchCriteria(min_tempo=90),
            SearchCriteria(max_tempo=120),
        ],
    )
    def test_lone_tempo_bound_is_dropped(self, criteria):
        keys = _keys(serialize_search_params(criteria))
        assert "min_tempo" not in keys
        assert "max_tempo" not in keys

    def test_tempo_pair_is_emitted_unchanged(self):
        params = serialize_search_params(SearchCriteria(min_tempo=90, max_tempo=120.5))
        assert params == [("min_tempo", 90), ("max_tempo", 120.5)]

    @pytest.mark.parametrize(
        "criteria",
        [
            SearchCriteria(min_duration=30),
            SearchCriteria(max_duration=180),
        ],
    )
    def test_lone_duration_bound_is_dropped(self, criteria):
        keys = _keys(serialize_search_params(criteria))
        assert "min_duration" not in keys
        assert "max_duration" not in keys

    def test_duration_pair_is_emitted(self):
        params = serialize_search_params(SearchCriteria(min_duration=30, max_duration=180))
        assert params == [("min_duration", 30), ("max_duration", 180)]

    def test_zero_bound_counts_as_absent(self):
        params = serialize_search_params(SearchCriteria(min_tempo=0, max_tempo=120))
        assert params == []

    def test_ranges_are_independent(self):
        criteria = SearchCriteria(min_tempo=90, max_tempo=120, min_duration=30)
        assert serialize_search_params(criteria) == [("min_tempo", 90), ("max_tempo", 120)]


def test_piano_scenario():
    criteria = SearchCriteria.from_arguments(
        {"q": "piano", "genre": ["jazz", "classical"], "minTempo": 90, "maxTempo": 120}
    )
    assert serialize_search_params(criteria) == [
        ("q", "piano"),
        ("genre[]", "jazz"),
        ("genre[]", "classical"),
        ("min_tempo", 90),
        ("max_tempo", 120),
    ]


def test_serialization_is_idempotent():
    criteria = SearchCriteria(q="x", genre=["a", "b"], min_duration=10, max_duration=20, per_page=15)
    assert serialize_search_params(criteria) == serialize_search_params(criteria)


def test_from_arguments_maps_camel_case_keys():
    criteria = SearchCriteria.from_arguments(
        {"minDuration": 10, "maxDuration": 20, "perPage": 30, "instrument": ("guitar",)}
    )
    assert criteria.min_duration == 10
    assert criteria.max_duration == 20
    assert criteria.per_page == 30
    assert criteria.instrument == ["guitar"]


def test_from_arguments_ignores_unknown_keys():
    criteria = SearchCriteria.from_arguments({"q": "rain", "colour": "blue"})
    assert serialize_search_params(criteria) == [("q", "rain")]


def test_from_arguments_wraps_single_string_filter():
    criteria = SearchCriteria.from_arguments({"genre": "jazz"})
    assert serialize_search_params(criteria) == [("genre[]", "jazz")]
