"""
Interferometer configurations and the reflection count they imply.

A configuration decides how reflections partition into measurement
axes:

    SHARED_REFERENCE   one common reference reflection, n targets
                       -> n + 1 reflections
    UNIQUE_REFERENCES  one reference reflection paired with each target
                       -> 2n reflections

The variant set is closed. Anything that is not one of the two members
is rejected with InvalidConfiguration; there is no default.
"""

from enum import Enum

from sfm.errors import DegenerateInput, InvalidConfiguration


class Configuration(Enum):

    SHARED_REFERENCE = "SHARED_REFERENCE"
    UNIQUE_REFERENCES = "UNIQUE_REFERENCES"

    @classmethod
    def parse(cls, tag):
        """
        Resolve a configuration member from a member or its name.

        Names are matched case-insensitively so form values such as
        "shared_reference" are accepted.

        Raises
        ------
        InvalidConfiguration
            If the tag does not name one of the two configurations.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            key = tag.strip().upper()
            if key in cls.__members__:
                return cls.__members__[key]
        raise InvalidConfiguration(
            "Invalid configuration: {!r}. Expected one of {}".format(
                tag, ", ".join(cls.__members__)))

    @property
    def display_name(self):
        if self is Configuration.SHARED_REFERENCE:
            return "Shared reference"
        return "Unique references"


def check_num_measurements(num_measurements):
    """Return num_measurements as int, raising DegenerateInput if < 1."""
    if isinstance(num_measurements, bool) or not isinstance(num_measurements, int):
        raise DegenerateInput(
            "Number of measurements must be an integer, got {!r}".format(
                num_measurements))
    if num_measurements < 1:
        raise DegenerateInput(
            "Number of measurements must be >= 1, got {}".format(
                num_measurements))
    return num_measurements


def reflection_count(configuration, num_measurements):
    """
    Number of reflections in the interferometer.

    Parameters
    ----------
    configuration : Configuration or str
        Interferometer configuration.
    num_measurements : int
        Number of simultaneous measurements (>= 1).

    Returns
    -------
    int
        n + 1 for SHARED_REFERENCE, 2n for UNIQUE_REFERENCES.
    """
    configuration = Configuration.parse(configuration)
    n = check_num_measurements(num_measurements)
    if configuration is Configuration.SHARED_REFERENCE:
        return n + 1
    if configuration is Configuration.UNIQUE_REFERENCES:
        return 2 * n
    raise InvalidConfiguration(
        "Unhandled configuration: {}".format(configuration))


def max_measurements(configuration, max_reflections):
    """Largest measurement count whose reflection count fits max_reflections."""
    configuration = Configuration.parse(configuration)
    if configuration is Configuration.SHARED_REFERENCE:
        return max_reflections - 1
    return max_reflections // 2
