# -*- coding: utf-8 -*-
"""Tests for project comparators and sorting."""

import functools
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from greendex.calculation.comparators import (
    DEFAULT_PROJECT_SORT,
    PROJECT_SORT_FIELDS,
    compare_strings,
    compare_values,
    create_project_comparator,
    sort_projects,
)
from greendex.calculation.factors import FoodFrequency


def _sorted(items, field, descending=False):
    return sorted(items, key=functools.cmp_to_key(create_project_comparator(field, descending)))


class TestCreateProjectComparator:
    """Tests for the three-way comparator."""

    @pytest.mark.parametrize("descending", [False, True])
    def test_nulls_sort_last_in_both_directions(self, descending):
        projects = [
            {"name": None},
            {"name": "Lisbon"},
            {},
            {"name": "Berlin"},
            {"name": None},
            {"name": "Athens"},
        ]
        result = [p.get("name") for p in _sorted(projects, "name", descending)]

        non_null = ["Athens", "Berlin", "Lisbon"]
        assert result[:3] == (non_null[::-1] if descending else non_null)
        assert result[3:] == [None, None, None]

    def test_numbers(self):
        items = [{"total_co2": 30.5}, {"total_co2": 2}, {"total_co2": 11}]
        assert [i["total_co2"] for i in _sorted(items, "total_co2")] == [2, 11, 30.5]
        assert [i["total_co2"] for i in _sorted(items, "total_co2", True)] == [30.5, 11, 2]

    def test_dates_compare_by_time(self):
        items = [
            {"start_date": date(2025, 5, 1)},
            {"start_date": date(2024, 12, 31)},
            {"start_date": date(2025, 1, 15)},
        ]
        result = [i["start_date"] for i in _sorted(items, "start_date")]
        assert result == [date(2024, 12, 31), date(2025, 1, 15), date(2025, 5, 1)]

    def test_naive_and_aware_datetimes(self):
        aware = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        naive_earlier = datetime(2025, 3, 1, 11, 0)
        comparator = create_project_comparator("created_at")

        assert comparator({"created_at": naive_earlier}, {"created_at": aware}) < 0
        assert comparator({"created_at": aware}, {"created_at": aware + timedelta(0)}) == 0

    def test_strings_are_case_insensitive(self):
        items = [{"name": "bravo"}, {"name": "Alpha"}, {"name": "charlie"}]
        assert [i["name"] for i in _sorted(items, "name")] == ["Alpha", "bravo", "charlie"]

    def test_accented_names_sort_with_their_base_letter(self):
        items = [{"city": "Zagreb"}, {"city": "Évora"}, {"city": "Berlin"}, {"city": "Århus"}]

        assert [i["city"] for i in _sorted(items, "city")] == ["Århus", "Berlin", "Évora", "Zagreb"]
        assert [i["city"] for i in _sorted(items, "city", descending=True)] == ["Zagreb", "Évora", "Berlin", "Århus"]

    def test_accent_and_case_break_ties_deterministically(self):
        assert compare_strings("evora", "Évora") != 0
        assert compare_strings("evora", "Évora") == -compare_strings("Évora", "evora")
        assert compare_strings("Évora", "Évora") == 0

    def test_attribute_objects(self):
        items = [SimpleNamespace(country="PT"), SimpleNamespace(country=None), SimpleNamespace(country="DE")]
        assert [i.country for i in _sorted(items, "country")] == ["DE", "PT", None]

    def test_equal_values_compare_zero(self):
        comparator = create_project_comparator("name", descending=True)
        assert comparator({"name": "Same"}, {"name": "Same"}) == 0
        assert comparator({}, {"name": None}) == 0

    def test_descending_only_negates_base_result(self):
        ascending = create_project_comparator("name")
        descending = create_project_comparator("name", descending=True)
        a, b, missing = {"name": "A"}, {"name": "B"}, {}

        assert ascending(a, b) < 0 < descending(a, b)
        assert ascending(a, missing) < 0 and descending(a, missing) < 0


class TestCompareValues:
    """Tests for the base comparison of non-null values."""

    def test_enum_values(self):
        assert compare_values(FoodFrequency.NEVER, FoodFrequency.RARELY) < 0

    def test_booleans_fall_back_to_ordering(self):
        assert compare_values(False, True) < 0

    def test_incomparable_types_are_deterministic(self):
        assert compare_values(1, "a") == -compare_values("a", 1)
        assert compare_values(1, "a") != 0


class TestSortProjects:
    """Tests for sort_projects."""

    def test_default_sort_is_name_descending(self):
        assert DEFAULT_PROJECT_SORT == ("name", True)
        projects = [{"name": "Alpha"}, {"name": "Gamma"}, {"name": "Beta"}]
        assert [p["name"] for p in sort_projects(projects)] == ["Gamma", "Beta", "Alpha"]

    def test_returns_new_list_and_is_stable(self):
        projects = [
            {"id": 1, "country": "PT"},
            {"id": 2, "country": "DE"},
            {"id": 3, "country": "PT"},
        ]
        result = sort_projects(projects, "country", descending=False)

        assert [p["id"] for p in result] == [2, 1, 3]
        assert [p["id"] for p in projects] == [1, 2, 3]

    def test_sort_fields(self):
        assert "start_date" in PROJECT_SORT_FIELDS
        assert PROJECT_SORT_FIELDS[0] == "name"
