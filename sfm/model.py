"""
Closed-form SFM interferometer formulas.

    recommended axis separation
        d = 0.5 * (w * c) / (2 * sqrt(2) * pi^2 * nuA * sigma)

    beat-frequency bandwidth of an axis
        f_beat = 2 * pi * nuA * fM * OPD / c

    optical path difference of a mechanical axis length L
        OPD = 2 * L            (round trip)

    recommended maximum stroke
        s = min(d_used, d_recommended) / 4

All lengths in metres, all frequencies in Hz.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from sfm.constants import (
    C_LIGHT,
    W_BAND,
    SIGMA_WINDOW,
    STROKE_DIVISOR,
    SEPARATION_PREFACTOR,
)
from sfm.errors import DegenerateInput


def _require_positive(value, name):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise DegenerateInput("{} must be a number, got {!r}".format(name, value))
    if not math.isfinite(value) or value <= 0:
        raise DegenerateInput("{} must be > 0, got {}".format(name, value))
    return value


def recommended_axis_separation(nu_a):
    """
    Axis separation that keeps neighbouring beat-frequency bands apart.

    Parameters
    ----------
    nu_a : float
        Optical frequency modulation amplitude in Hz.

    Returns
    -------
    float
        Recommended mechanical separation between axis lengths in metres.
        Monotonically decreasing in nu_a.
    """
    nu_a = _require_positive(nu_a, "Modulation amplitude nuA")
    return 0.5 * (W_BAND * C_LIGHT) / (SEPARATION_PREFACTOR * nu_a * SIGMA_WINDOW)


def optical_path_difference(mechanical_length):
    """Round-trip optical path difference for a mechanical axis length."""
    return 2.0 * mechanical_length


def beat_frequency_bandwidth(nu_a, f_m, opd):
    """
    Beat-frequency bandwidth of an interference axis.

    Parameters
    ----------
    nu_a : float
        Optical frequency modulation amplitude (Hz).
    f_m : float
        Modulation frequency (Hz).
    opd : float
        Optical path difference (m). Zero gives a zero bandwidth.

    Returns
    -------
    float
        Bandwidth in Hz.
    """
    nu_a = _require_positive(nu_a, "Modulation amplitude nuA")
    f_m = _require_positive(f_m, "Modulation frequency fM")
    if opd < 0:
        raise DegenerateInput("Optical path difference must be >= 0, got {}".format(opd))
    return 2.0 * math.pi * nu_a * f_m * opd / C_LIGHT


def recommended_max_stroke(axis_separation, recommended_separation):
    """Largest mechanical stroke (m) that stays inside one band."""
    axis_separation = _require_positive(axis_separation, "Axis separation")
    recommended_separation = _require_positive(
        recommended_separation, "Recommended axis separation")
    return min(axis_separation, recommended_separation) / STROKE_DIVISOR
