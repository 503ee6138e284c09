"""
Tests for the placement search and demodulatability checks.

The stored catalog must be exactly what the search generates; if this
fails, re-run data/build_solutions.py.
"""

import pytest

from data.solutions import SOLUTIONS
from sfm.solver import (
    Solution,
    build_catalog,
    candidate_cases,
    find_solutions_starting_at,
    format_positions,
    is_demodulatable,
    is_valid_placement,
    normalized_opds,
)


class TestOpds:

    def test_pairwise_differences(self):
        assert normalized_opds([0, 1, 3]) == [1, 2, 3]

    def test_count_is_n_choose_2(self):
        assert len(normalized_opds([0, 1, 4, 9, 11])) == 10

    def test_order_independent(self):
        assert normalized_opds([3, 0, 1]) == normalized_opds([0, 1, 3])

    def test_single_position(self):
        assert normalized_opds([5]) == []


class TestDemodulatable:

    def test_golomb_ruler(self):
        assert is_demodulatable([0, 1, 4, 6])

    def test_repeated_difference(self):
        """[0, 1, 2] has difference 1 twice."""
        assert not is_demodulatable([0, 1, 2])

    def test_valid_placement(self):
        assert is_valid_placement([0, 2, 5])
        assert not is_valid_placement([0])
        assert not is_valid_placement([0, 0, 1])
        assert not is_valid_placement([-1, 2])


class TestCandidates:

    def test_enumeration(self):
        cases = list(candidate_cases(4, 5))
        assert cases == [
            [0, 1, 2, 5], [0, 1, 3, 5], [0, 1, 4, 5],
            [0, 2, 3, 5], [0, 2, 4, 5], [0, 3, 4, 5],
        ]

    def test_pair(self):
        assert list(candidate_cases(2, 3)) == [[0, 3]]

    def test_too_small(self):
        with pytest.raises(ValueError):
            list(candidate_cases(1, 5))

    def test_largest_too_small(self):
        with pytest.raises(ValueError):
            list(candidate_cases(5, 3))

    def test_search_advances_largest(self):
        """No 4-mark ruler fits in length 5; the search moves on to 6."""
        assert find_solutions_starting_at(4, 3) == [[0, 1, 4, 6], [0, 2, 5, 6]]


class TestCatalog:

    def test_regenerates_stored_catalog(self):
        catalog = build_catalog(max(SOLUTIONS))
        assert sorted(catalog) == sorted(SOLUTIONS)
        for size, placements in catalog.items():
            stored = [entry["solution"] for entry in SOLUTIONS[size]]
            assert [tuple(p) for p in placements] == stored

    def test_optimal_lengths(self):
        """Largest position of each size is the optimal Golomb ruler length."""
        catalog = build_catalog(6)
        lengths = {size: max(max(p) for p in placements)
                   for size, placements in catalog.items()}
        assert lengths == {2: 1, 3: 3, 4: 6, 5: 11, 6: 17}


class TestSolution:

    def test_name(self, golomb_three):
        assert golomb_three.name == "[0, 1, 3]"
        assert format_positions((0, 2, 3)) == "[0, 2, 3]"

    def test_sequence_protocol(self, golomb_three):
        assert len(golomb_three) == 3
        assert golomb_three[2] == 3
        assert list(golomb_three) == [0, 1, 3]

    def test_properties(self, golomb_three):
        assert golomb_three.size == 3
        assert golomb_three.largest == 3
        assert golomb_three.opds == [1, 2, 3]
        assert golomb_three.is_demodulatable

    def test_equality(self):
        assert Solution(0, [0, 1, 3]) == Solution(0, (0, 1, 3))
        assert Solution(0, [0, 1, 3]) != Solution(1, [0, 1, 3])
        assert len({Solution(0, [0, 1]), Solution(0, (0, 1))}) == 1

    def test_to_dict(self, golomb_three):
        assert golomb_three.to_dict() == {
            "value": 0, "solution": [0, 1, 3], "name": "[0, 1, 3]"}
