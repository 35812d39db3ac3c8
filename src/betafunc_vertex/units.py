# src/betafunc_vertex/units.py
"""
Unit system used inside the vertex smearing model.

Internally every length is expressed in millimetres and every time is turned
into a length (c * t, also in millimetres), matching the event record
convention of the downstream generators. External values are tagged with the
scale factor of the unit they arrive in and converted exactly once.
"""

from __future__ import annotations

from typing import NamedTuple

from scipy import constants

# =============================================================================
# BASE UNITS
# =============================================================================

MM = 1.0
CM = 10.0 * MM
M = 1000.0 * MM

NS = 1.0
S = 1.0e9 * NS

RADIAN = 1.0

C_LIGHT = constants.c * M / S  # Speed of light in mm/ns

# Time offsets are stored as the distance light travels in that time
NS_TO_LENGTH = NS * C_LIGHT


class Quantity(NamedTuple):
    """A raw external value together with the factor that brings it to internal units."""

    value: float
    scale: float

    def to_internal(self) -> float:
        return float(self.value) * self.scale


def centimetres(value: float) -> Quantity:
    return Quantity(value, CM)


def nanoseconds(value: float) -> Quantity:
    """Tag a time in ns; the internal value is the equivalent length in mm."""
    return Quantity(value, NS_TO_LENGTH)


def radians(value: float) -> Quantity:
    return Quantity(value, RADIAN)
