"""
Error taxonomy for the SFM designer core.

Every error is a deterministic failure of a pure function. All of them
derive from ValueError so the presentation layer can keep a single
`except ValueError` boundary and turn them into validation messages.
"""


class DesignError(ValueError):
    """Base class for all SFM designer input errors."""


class InvalidConfiguration(DesignError):
    """Configuration tag is not SHARED_REFERENCE or UNIQUE_REFERENCES."""


class OutOfRangeSolution(DesignError):
    """Solution index does not exist for the resolved reflection count."""


class UnsupportedReflectionCount(DesignError):
    """Reflection count is outside the catalog or the label alphabet."""


class DegenerateInput(DesignError):
    """Non-positive measurement count, frequency or length."""
