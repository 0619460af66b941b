"""Tests for bounded directional iteration."""

from __future__ import annotations

import pytest

from render_helpers.iteration import item_at, iter_indices, iterate
from render_helpers.params import IterParams


def _collect(params):
    seen = []

    def render(item):
        seen.append(item)
        return f"[{item}]"

    output = iterate(params, render)
    return seen, output


class TestIterIndices:
    def test_ascending(self):
        assert list(iter_indices(0, 4)) == [0, 1, 2, 3]

    def test_descending_excludes_end(self):
        assert list(iter_indices(3, 0)) == [3, 2, 1]

    def test_equal_endpoints_are_empty(self):
        assert list(iter_indices(2, 2)) == []

    def test_negative_range(self):
        assert list(iter_indices(-2, 1)) == [-2, -1, 0]


class TestIterParams:
    def test_defaults(self):
        params = IterParams()
        assert params.items == []
        assert params.from_index == 0
        assert params.to_index == 0

    def test_to_defaults_to_length(self):
        assert IterParams(items=[1, 2, 3]).to_index == 3

    def test_explicit_zero_is_kept(self):
        assert IterParams(items=[1, 2, 3], from_index=2, to_index=0).to_index == 0

    @pytest.mark.parametrize("to_index", [None, "", False])
    def test_falsy_to_uses_length(self, to_index):
        assert IterParams(items=[1, 2], to_index=to_index).to_index == 2

    def test_string_bounds_are_coerced(self):
        params = IterParams(items=[1, 2, 3], from_index="2", to_index="0")
        assert (params.from_index, params.to_index) == (2, 0)

    def test_direction(self):
        assert IterParams(items=[1], from_index=0, to_index=1).direction == 1
        assert IterParams(items=[1], from_index=1, to_index=0).direction == -1
        assert IterParams(items=[1], from_index=1, to_index=1).direction == -1


class TestIterate:
    def test_descending_visits_in_order(self):
        seen, output = _collect(IterParams([10, 20, 30, 40], 3, 0))
        assert seen == [40, 30, 20]
        assert output == "[40][30][20]"

    def test_empty_range_renders_nothing(self):
        seen, output = _collect(IterParams([], 0, 0))
        assert seen == []
        assert output == ""

    def test_falsy_items_are_skipped(self):
        seen, _ = _collect(IterParams([0, "a", None, "b"], 0, 4))
        assert seen == ["a", "b"]

    def test_false_and_empty_string_skipped(self):
        seen, _ = _collect(IterParams([False, "", "x"]))
        assert seen == ["x"]

    def test_range_past_the_end_terminates(self):
        seen, _ = _collect(IterParams(["a", "b"], 0, 5))
        assert seen == ["a", "b"]

    def test_negative_indices_do_not_wrap(self):
        seen, _ = _collect(IterParams(["a", "b", "c"], 1, -3))
        assert seen == ["b", "a"]

    def test_subset(self):
        seen, _ = _collect(IterParams(list("abcdef"), 2, 5))
        assert seen == ["c", "d", "e"]


class TestItemAt:
    def test_in_range(self):
        assert item_at(["a"], 0) == "a"

    def test_out_of_range(self):
        assert item_at(["a"], 1) is None
        assert item_at(["a"], -1) is None
