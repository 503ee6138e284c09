"""
Tests for the stored solution catalog.
"""

import pytest

from data.solutions import (
    SOLUTIONS,
    get_catalog,
    get_solution,
    get_solutions,
    max_reflection_count,
    supported_reflection_counts,
)
from sfm.errors import OutOfRangeSolution, UnsupportedReflectionCount


class TestCatalogContents:

    def test_supported_counts(self):
        assert supported_reflection_counts() == [2, 3, 4, 5, 6]
        assert max_reflection_count() == 6

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
    def test_entries_well_formed(self, n):
        for index, entry in enumerate(SOLUTIONS[n]):
            positions = entry["solution"]
            assert entry["value"] == index
            assert len(positions) == n
            assert positions[0] == 0
            assert list(positions) == sorted(set(positions))
            assert entry["name"] == "[" + ", ".join(str(p) for p in positions) + "]"

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
    def test_every_solution_demodulatable(self, n):
        for s in get_solutions(n):
            assert s.is_demodulatable

    def test_counts_per_size(self):
        assert [len(SOLUTIONS[n]) for n in range(2, 7)] == [1, 2, 2, 4, 8]


class TestLookup:

    def test_get_solution(self):
        s = get_solution(4, 1)
        assert s.index == 1
        assert s.positions == (0, 2, 5, 6)

    @pytest.mark.parametrize("n", [0, 1, 7, 24])
    def test_unsupported_count(self, n):
        with pytest.raises(UnsupportedReflectionCount):
            get_solutions(n)

    @pytest.mark.parametrize("index", [-1, 2, 99, 1.0, True, "0"])
    def test_out_of_range_index(self, index):
        with pytest.raises(OutOfRangeSolution):
            get_solution(3, index)

    def test_catalog_json_keys(self):
        catalog = get_catalog()
        assert sorted(catalog) == ["2", "3", "4", "5", "6"]
        assert catalog["3"][1] == {"value": 1, "solution": [0, 2, 3], "name": "[0, 2, 3]"}
