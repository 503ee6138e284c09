"""
Physical and design constants for SFM interferometer calculations.

The band-separation coefficient W_BAND and the window width SIGMA_WINDOW
are carried verbatim from the SFM demodulation literature. They are
fixed physical constants of the design procedure, not tuning knobs.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

import math

# Speed of light in vacuum (SI exact)
C_LIGHT = 299792458.0  # m/s

# Band-separation coefficient: spacing between neighbouring beat-frequency
# bands in units of the band half-width.
W_BAND = 2.5

# Window width (fraction of the modulation period) used by the demodulator.
SIGMA_WINDOW = 0.0225

# Recommended maximum mechanical stroke is a quarter of the usable axis
# separation.
STROKE_DIVISOR = 4.0

# Denominator prefactor of the recommended axis separation: 2*sqrt(2)*pi^2
SEPARATION_PREFACTOR = 2.0 * math.sqrt(2.0) * math.pi ** 2

# Unit conversions used by the presentation layer
HZ_TO_KHZ = 1e-3
HZ_TO_MHZ = 1e-6
HZ_TO_GHZ = 1e-9
KHZ_TO_HZ = 1e3
MHZ_TO_HZ = 1e6
GHZ_TO_HZ = 1e9
M_TO_MM = 1e3


def as_dict():
    """Return the constants exposed by the /api/constants endpoint."""
    return {
        "C_LIGHT": C_LIGHT,
        "W_BAND": W_BAND,
        "SIGMA_WINDOW": SIGMA_WINDOW,
        "STROKE_DIVISOR": STROKE_DIVISOR,
    }
