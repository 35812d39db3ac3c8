"""
Common pytest fixtures for the vertex smearing tests.

This module contains shared fixtures and a scripted random source used across
test modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from betafunc_vertex.beamspot.parameters import BeamSpotParameters
from betafunc_vertex.conditions.records import SimBeamSpotRecord
from betafunc_vertex.config import VertexSmearingConfig

if TYPE_CHECKING:
    from collections.abc import Iterable


class ScriptedGaussianSource:
    """Gaussian source returning ``mean + sigma * draw`` for a fixed list of standard draws."""

    def __init__(self, draws: Iterable[float]):
        self._draws = iter(draws)
        self.calls: list[tuple[float, float]] = []

    def gauss(self, mean: float, sigma: float) -> float:
        self.calls.append((mean, sigma))
        return mean + sigma * next(self._draws)


@pytest.fixture
def scripted_source():
    """Factory for sources with a known sequence of standard normal draws."""
    return ScriptedGaussianSource


@pytest.fixture
def nominal_parameters() -> BeamSpotParameters:
    """Internal-unit parameters with no offsets and no crossing angle."""
    return BeamSpotParameters(
        x0=0.0,
        y0=0.0,
        z0=0.0,
        sigma_z=5.3,
        beta_star=55.0,
        emittance=5.03e-8,
        time_offset=0.0,
    )


@pytest.fixture
def nominal_config() -> VertexSmearingConfig:
    """Static configuration in user units (cm, ns, rad)."""
    return VertexSmearingConfig(
        x0=0.0322,
        y0=0.0,
        z0=0.0,
        sigma_z=5.3,
        beta_star=55.0,
        emittance=5.03e-8,
        alpha=0.0,
        phi=142.5e-6,
        time_offset=0.0,
    )


@pytest.fixture
def betafunc_record() -> SimBeamSpotRecord:
    """Conditions record describing beta-function optics, in cm/ns/rad."""
    return SimBeamSpotRecord(
        x=0.1,
        y=-0.05,
        z=0.2,
        sigma_z=3.8,
        beta_star=30.0,
        emittance=1.7e-8,
        alpha=0.0,
        phi=-160e-6,
        time_offset=1.0,
    )


@pytest.fixture
def gaussian_record(betafunc_record: SimBeamSpotRecord) -> SimBeamSpotRecord:
    """Same record flagged as a purely Gaussian beam spot."""
    return SimBeamSpotRecord(
        x=betafunc_record.x,
        y=betafunc_record.y,
        z=betafunc_record.z,
        sigma_z=betafunc_record.sigma_z,
        beta_star=betafunc_record.beta_star,
        emittance=betafunc_record.emittance,
        alpha=betafunc_record.alpha,
        phi=betafunc_record.phi,
        time_offset=betafunc_record.time_offset,
        is_gaussian=True,
    )
