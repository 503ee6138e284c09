"""
Interference axes between reflections.

Every unordered pair of reflections (i, j), i < j, forms an axis. Axes
are enumerated in lexicographic order, which is also the canonical
naming order of the characteristics table. Reflections are labelled
with Greek minuscules and an axis is named by the labels of its two
reflections, e.g. (0, 2) -> alpha gamma.

IMPORTANT: No unicode characters allowed in source (Windows charmap
constraint); the alphabet is written with escapes.
"""

from sfm.configuration import Configuration, check_num_measurements
from sfm.errors import InvalidConfiguration, UnsupportedReflectionCount

# alpha..omega without the final sigma (24 symbols)
GREEK_ALPHABET = (
    "\u03b1\u03b2\u03b3\u03b4\u03b5\u03b6\u03b7\u03b8"
    "\u03b9\u03ba\u03bb\u03bc\u03bd\u03be\u03bf\u03c0"
    "\u03c1\u03c3\u03c4\u03c5\u03c6\u03c7\u03c8\u03c9"
)


def _check_reflection_count(reflection_count):
    if reflection_count < 2:
        raise UnsupportedReflectionCount(
            "An interferometer needs at least 2 reflections, got {}".format(
                reflection_count))
    if reflection_count > len(GREEK_ALPHABET):
        raise UnsupportedReflectionCount(
            "At most {} reflections can be labelled, got {}".format(
                len(GREEK_ALPHABET), reflection_count))


def reflection_label(i):
    """Single character label of reflection i."""
    if not 0 <= i < len(GREEK_ALPHABET):
        raise UnsupportedReflectionCount(
            "Reflection index {} has no label (alphabet has {} symbols)".format(
                i, len(GREEK_ALPHABET)))
    return GREEK_ALPHABET[i]


def axis_label(i, j):
    """Name of the axis between reflections i and j."""
    return reflection_label(i) + reflection_label(j)


def enumerate_axes(reflection_count):
    """
    All reflection pairs in lexicographic order.

    Parameters
    ----------
    reflection_count : int

    Returns
    -------
    list of tuple
        C(reflection_count, 2) pairs (i, j) with i < j.
    """
    _check_reflection_count(reflection_count)
    return [(i, j)
            for i in range(reflection_count)
            for j in range(i + 1, reflection_count)]


def normalized_length(solution, i, j):
    """Normalized length of axis (i, j): |s[i] - s[j]|."""
    return abs(solution[i] - solution[j])


def measurement_axis_indices(configuration, num_measurements):
    """
    Axes that carry a measurement, one per measurement.

    SHARED_REFERENCE:   (0, k) for k = 1..n
    UNIQUE_REFERENCES:  (2k, 2k + 1) for k = 0..n-1
    """
    configuration = Configuration.parse(configuration)
    n = check_num_measurements(num_measurements)
    if configuration is Configuration.SHARED_REFERENCE:
        return [(0, k) for k in range(1, n + 1)]
    if configuration is Configuration.UNIQUE_REFERENCES:
        return [(2 * k, 2 * k + 1) for k in range(n)]
    raise InvalidConfiguration(
        "Unhandled configuration: {}".format(configuration))
