"""
Auto-computed values that the user may freeze and override.

The calculator derives several values (axis separation, max stroke)
from the modulation parameters. The user can replace any of them. Both
cases are represented by a tagged value so the presentation layer can
show where a number came from, while the core only ever receives the
resolved scalar via `.value`.
"""


class Derived:
    """A value computed from other inputs."""

    source = "derived"
    is_overridden = False

    def __init__(self, value):
        self.value = value

    def to_dict(self):
        return {"value": self.value, "source": self.source}

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.value)


class UserOverridden(Derived):
    """A value typed in by the user in place of the derived one."""

    source = "user"
    is_overridden = True


def resolve(derived_value, override=None):
    """
    Pick the user override if one was given, otherwise the derived value.

    Parameters
    ----------
    derived_value : float
        The auto-computed value.
    override : float or None
        User supplied value. None (or an empty form field) means
        "not overridden".

    Returns
    -------
    Derived or UserOverridden
    """
    if override is None or override == "":
        return Derived(derived_value)
    return UserOverridden(float(override))
