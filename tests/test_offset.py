# -*- coding: utf-8 -*-
"""Tests for the tree-offset estimator."""

import pytest

from greendex.calculation.factors import DEFAULT_EMISSION_MODEL
from greendex.calculation.offset import trees_needed


class TestTreesNeeded:
    """Tests for trees_needed rounding."""

    @pytest.mark.parametrize("total, expected", [
        (0, 0),
        (0.001, 1),
        (22, 1),
        (22.0001, 2),
        (44, 2),
        (47.349, 3),
    ])
    def test_rounds_up(self, total, expected):
        assert trees_needed(total) == expected

    @pytest.mark.parametrize("total", [-10, float("nan"), float("inf"), None])
    def test_invalid_totals_need_no_trees(self, total):
        assert trees_needed(total) == 0

    def test_returns_int(self):
        assert isinstance(trees_needed(100.5), int)

    def test_absorption_comes_from_model(self):
        model = DEFAULT_EMISSION_MODEL.with_overrides(version="slow-trees", co2_per_tree_per_year=10)
        assert trees_needed(22, model) == 3
