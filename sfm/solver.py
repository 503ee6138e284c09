"""
Solutions: integer placements of reflections along a normalized axis.

A solution places `size` reflections at distinct integer positions that
start at 0. Every pair of reflections forms an interference axis whose
normalized optical path difference (OPD) is the difference of their
positions. A placement is demodulatable when all C(size, 2) OPDs are
distinct, i.e. no two axes share a beat-frequency band.

The catalog in data/solutions.py is generated by `build_catalog()`:

    1. For a given size, enumerate every ascending placement that
       contains 0 and `largest` (the middle positions are combinations
       of 1..largest-1).
    2. Keep the demodulatable ones. If none exist, increase `largest`
       by one and repeat. All solutions of the first `largest` that has
       any are returned.
    3. The next size starts its search at the largest position found so
       far (and at least at the size).
"""

import itertools

import numpy as np


class Solution:
    """
    An immutable placement of reflections, identified by its index.

    Parameters
    ----------
    index : int
        Position of this solution in the catalog list for its size.
    positions : sequence of int
        Ascending, pairwise distinct, non-negative positions.
    """

    def __init__(self, index, positions):
        self.index = int(index)
        self.positions = tuple(int(p) for p in positions)

    def __len__(self):
        return len(self.positions)

    def __getitem__(self, i):
        return self.positions[i]

    def __iter__(self):
        return iter(self.positions)

    def __eq__(self, other):
        return (isinstance(other, Solution)
                and self.index == other.index
                and self.positions == other.positions)

    def __hash__(self):
        return hash((self.index, self.positions))

    def __repr__(self):
        return "Solution({}, {})".format(self.index, list(self.positions))

    @property
    def name(self):
        """Display name, the bracketed position list: '[0, 1, 3]'."""
        return format_positions(self.positions)

    @property
    def size(self):
        return len(self.positions)

    @property
    def largest(self):
        return max(self.positions)

    @property
    def opds(self):
        return normalized_opds(self.positions)

    @property
    def is_demodulatable(self):
        return is_demodulatable(self.positions)

    def to_dict(self):
        return {
            "value": self.index,
            "solution": list(self.positions),
            "name": self.name,
        }


def format_positions(positions):
    return "[" + ", ".join(str(int(p)) for p in positions) + "]"


def normalized_opds(positions):
    """
    Sorted multiset of pairwise position differences.

    Parameters
    ----------
    positions : sequence of int

    Returns
    -------
    list of int
        The C(n, 2) absolute differences, ascending.
    """
    p = np.asarray(positions, dtype=np.int64)
    n = len(p)
    if n < 2:
        return []
    upper = np.triu_indices(n, k=1)
    diffs = np.abs(np.subtract.outer(p, p))[upper]
    return sorted(int(d) for d in diffs)


def is_demodulatable(positions):
    """True when every pairwise OPD is unique (no shared beat bands)."""
    opds = normalized_opds(positions)
    return len(opds) == len(set(opds))


def is_valid_placement(positions):
    """Non-negative, pairwise distinct, at least two positions."""
    if len(positions) < 2:
        return False
    if any(int(p) < 0 for p in positions):
        return False
    return len(set(int(p) for p in positions)) == len(positions)


def candidate_cases(size, largest):
    """
    Every ascending placement of `size` positions containing 0 and `largest`.

    Yields
    ------
    list of int
        Candidate placements in lexicographic order.
    """
    if size < 2:
        raise ValueError("Placement size must be >= 2, got {}".format(size))
    if largest < size - 1:
        raise ValueError(
            "Largest position {} cannot hold {} distinct positions".format(
                largest, size))
    for middle in itertools.combinations(range(1, largest), size - 2):
        yield [0] + list(middle) + [largest]


def find_solutions_starting_at(size, largest):
    """
    All demodulatable placements for the smallest feasible `largest`.

    The search starts at `largest` and increments it until at least one
    candidate is demodulatable.

    Returns
    -------
    list of list of int
        Placements in lexicographic order.
    """
    while True:
        solutions = [case for case in candidate_cases(size, largest)
                     if is_demodulatable(case)]
        if solutions:
            return solutions
        largest += 1


def build_catalog(max_size):
    """
    Generate the solution catalog for sizes 2..max_size.

    Returns
    -------
    dict
        size -> list of placements (lists of int).
    """
    catalog = {}
    largest = 1
    for size in range(2, max_size + 1):
        solutions = find_solutions_starting_at(size, max(largest, size - 1))
        catalog[size] = solutions
        largest = max(largest, max(max(s) for s in solutions), size)
    return catalog
