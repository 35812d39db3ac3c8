"""Transverse beam size near the interaction point from the beta function."""

import numpy as np

SQRT2 = np.sqrt(2.0)


def width_at(z, z0, beta_star, emittance):
    """
    Single-beam transverse width at longitudinal position ``z``.

    Near the focus the beta function grows as beta* + (z - z0)^2 / beta*, so
    sigma(z) = sqrt(emittance * (beta* + (z - z0)^2 / beta*)).

    Works on scalars and numpy arrays alike; ``beta_star`` must be non-zero.
    """
    return np.sqrt(emittance * (beta_star + ((z - z0) * (z - z0)) / beta_star))


def beamspot_width(z, z0, beta_star, emittance):
    """Luminous region width: two independent beams of equal size overlap with sigma / sqrt(2)."""
    return width_at(z, z0, beta_star, emittance) / SQRT2
