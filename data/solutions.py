"""
Solution catalog: reflection count -> demodulatable placements.

DO NOT EDIT the SOLUTIONS table by hand.
It is generated by data/build_solutions.py (see sfm.solver.build_catalog).

Each entry contains:
  value:    index of the solution within its reflection count
  solution: normalized reflection positions (ascending, starting at 0)
  name:     display name, the bracketed position list

Coverage is reflection counts 2..6. Larger counts are a known
limitation; extending the catalog is a data-only change.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

from sfm.errors import OutOfRangeSolution, UnsupportedReflectionCount
from sfm.solver import Solution

# BEGIN GENERATED
SOLUTIONS = {
    2: [
        {"value": 0, "solution": (0, 1), "name": "[0, 1]"},
    ],
    3: [
        {"value": 0, "solution": (0, 1, 3), "name": "[0, 1, 3]"},
        {"value": 1, "solution": (0, 2, 3), "name": "[0, 2, 3]"},
    ],
    4: [
        {"value": 0, "solution": (0, 1, 4, 6), "name": "[0, 1, 4, 6]"},
        {"value": 1, "solution": (0, 2, 5, 6), "name": "[0, 2, 5, 6]"},
    ],
    5: [
        {"value": 0, "solution": (0, 1, 4, 9, 11), "name": "[0, 1, 4, 9, 11]"},
        {"value": 1, "solution": (0, 2, 7, 8, 11), "name": "[0, 2, 7, 8, 11]"},
        {"value": 2, "solution": (0, 2, 7, 10, 11), "name": "[0, 2, 7, 10, 11]"},
        {"value": 3, "solution": (0, 3, 4, 9, 11), "name": "[0, 3, 4, 9, 11]"},
    ],
    6: [
        {"value": 0, "solution": (0, 1, 4, 10, 12, 17), "name": "[0, 1, 4, 10, 12, 17]"},
        {"value": 1, "solution": (0, 1, 4, 10, 15, 17), "name": "[0, 1, 4, 10, 15, 17]"},
        {"value": 2, "solution": (0, 1, 8, 11, 13, 17), "name": "[0, 1, 8, 11, 13, 17]"},
        {"value": 3, "solution": (0, 1, 8, 12, 14, 17), "name": "[0, 1, 8, 12, 14, 17]"},
        {"value": 4, "solution": (0, 2, 7, 13, 16, 17), "name": "[0, 2, 7, 13, 16, 17]"},
        {"value": 5, "solution": (0, 3, 5, 9, 16, 17), "name": "[0, 3, 5, 9, 16, 17]"},
        {"value": 6, "solution": (0, 4, 6, 9, 16, 17), "name": "[0, 4, 6, 9, 16, 17]"},
        {"value": 7, "solution": (0, 5, 7, 13, 16, 17), "name": "[0, 5, 7, 13, 16, 17]"},
    ],
}
# END GENERATED


def supported_reflection_counts():
    """Reflection counts covered by the catalog, ascending."""
    return sorted(SOLUTIONS)


def max_reflection_count():
    return max(SOLUTIONS)


def get_solutions(reflection_count):
    """
    Candidate solutions for a reflection count.

    Returns
    -------
    list of Solution

    Raises
    ------
    UnsupportedReflectionCount
        If the catalog has no entry for reflection_count.
    """
    entries = SOLUTIONS.get(reflection_count)
    if entries is None:
        raise UnsupportedReflectionCount(
            "No solutions catalogued for {} reflections (supported: {})".format(
                reflection_count,
                ", ".join(str(n) for n in supported_reflection_counts())))
    return [Solution(e["value"], e["solution"]) for e in entries]


def get_solution(reflection_count, solution_index):
    """
    Look up one solution by index, range-checked.

    Raises
    ------
    UnsupportedReflectionCount
        If the reflection count is not catalogued.
    OutOfRangeSolution
        If solution_index is not a valid index for that count.
    """
    solutions = get_solutions(reflection_count)
    if (isinstance(solution_index, bool) or not isinstance(solution_index, int)
            or not 0 <= solution_index < len(solutions)):
        raise OutOfRangeSolution(
            "Solution index {!r} is out of range for {} reflections "
            "(0..{})".format(solution_index, reflection_count, len(solutions) - 1))
    return solutions[solution_index]


def get_catalog():
    """Return the whole catalog in a JSON friendly form keyed by count."""
    return {
        str(n): [s.to_dict() for s in get_solutions(n)]
        for n in supported_reflection_counts()
    }
