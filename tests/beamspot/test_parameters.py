"""
Tests for betafunc_vertex.beamspot.parameters module.
"""

from __future__ import annotations

import math

import pytest

from betafunc_vertex.beamspot.parameters import BeamSpotParameters
from betafunc_vertex.conditions.records import SimBeamSpotRecord
from betafunc_vertex.config import VertexSmearingConfig
from betafunc_vertex.exceptions import ConfigurationError
from betafunc_vertex.units import C_LIGHT, CM, Quantity


class TestValidation:
    """Invariants enforced on construction."""

    @pytest.mark.parametrize("sigma_z", [0.0, -1.0])
    def test_non_positive_sigma_z(self, sigma_z: float) -> None:
        with pytest.raises(ConfigurationError, match="sigma_z"):
            BeamSpotParameters(0.0, 0.0, 0.0, sigma_z, 550.0, 5e-7)

    def test_positive_sigma_z_accepted(self) -> None:
        params = BeamSpotParameters(0.0, 0.0, 0.0, 1.0, 550.0, 5e-7)
        assert params.sigma_z == 1.0

    def test_non_positive_beta_star(self) -> None:
        with pytest.raises(ConfigurationError, match="beta_star"):
            BeamSpotParameters(0.0, 0.0, 0.0, 1.0, 0.0, 5e-7)

    def test_negative_emittance(self) -> None:
        with pytest.raises(ConfigurationError, match="emittance"):
            BeamSpotParameters(0.0, 0.0, 0.0, 1.0, 550.0, -5e-7)

    def test_non_finite_value(self) -> None:
        with pytest.raises(ConfigurationError, match="x0"):
            BeamSpotParameters(math.nan, 0.0, 0.0, 1.0, 550.0, 5e-7)

    def test_with_sigma_z_only_changes_sigma_z(
        self, nominal_parameters: BeamSpotParameters
    ) -> None:
        """Replacing the bunch length keeps every other field and allows zero."""
        updated = nominal_parameters.with_sigma_z(0.0)
        assert updated.sigma_z == 0.0
        assert updated.beta_star == nominal_parameters.beta_star
        assert updated.emittance == nominal_parameters.emittance
        assert nominal_parameters.sigma_z == 5.3
        assert updated == BeamSpotParameters(
            0.0, 0.0, 0.0, 0.0, 55.0, 5.03e-8, allow_zero_sigma_z=True
        )

    def test_with_sigma_z_still_validates(self, nominal_parameters: BeamSpotParameters) -> None:
        """Only zero is let through; negative and NaN bunch lengths are refused."""
        with pytest.raises(ConfigurationError):
            nominal_parameters.with_sigma_z(-1.0)
        with pytest.raises(ConfigurationError):
            nominal_parameters.with_sigma_z(math.nan)


class TestIngestion:
    """Unit conversion when parameters are ingested."""

    def test_from_quantities_applies_scale(self) -> None:
        params = BeamSpotParameters.from_quantities(
            x0=Quantity(1.0, 2.0),
            y0=Quantity(0.0, 1.0),
            z0=Quantity(-3.0, 10.0),
            sigma_z=Quantity(4.0, 0.5),
            beta_star=Quantity(1.0, 1.0),
            emittance=Quantity(1.0, 1.0),
        )
        assert params.x0 == 2.0
        assert params.z0 == -30.0
        assert params.sigma_z == 2.0

    def test_from_config_converts_units(self, nominal_config: VertexSmearingConfig) -> None:
        """cm become mm, ns become c * t in mm, angles stay in rad."""
        config = VertexSmearingConfig(
            x0=0.0322,
            sigma_z=5.3,
            beta_star=55.0,
            emittance=5.03e-8,
            phi=nominal_config.phi,
            time_offset=2.0,
        )
        params = BeamSpotParameters.from_config(config)
        assert math.isclose(params.x0, 0.322, rel_tol=1e-15)
        assert math.isclose(params.sigma_z, 53.0, rel_tol=1e-15)
        assert math.isclose(params.beta_star, 550.0, rel_tol=1e-15)
        assert math.isclose(params.emittance, 5.03e-7, rel_tol=1e-15)
        assert math.isclose(params.time_offset, 2.0 * C_LIGHT, rel_tol=1e-15)
        assert math.isclose(params.time_offset, 599.584916, rel_tol=1e-12)
        assert params.phi == nominal_config.phi

    def test_from_config_rejects_default_sigma_z(self) -> None:
        """The default configuration has no bunch length and is refused."""
        with pytest.raises(ConfigurationError):
            BeamSpotParameters.from_config(VertexSmearingConfig(beta_star=55.0))

    def test_from_record_converts_units(self, betafunc_record: SimBeamSpotRecord) -> None:
        params = BeamSpotParameters.from_record(betafunc_record)
        assert math.isclose(params.x0, betafunc_record.x * CM, rel_tol=1e-15)
        assert math.isclose(params.y0, betafunc_record.y * CM, rel_tol=1e-15)
        assert math.isclose(params.sigma_z, 38.0, rel_tol=1e-15)
        assert math.isclose(params.time_offset, C_LIGHT, rel_tol=1e-15)
        assert params.phi == betafunc_record.phi
