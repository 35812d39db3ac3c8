# src/betafunc_vertex/model.py
"""
Beta-function vertex smearing model.

Smears the collision vertex according to the beta function in the transverse
plane and a Gaussian along z and in time, and provides the inverse Lorentz
boost accounting for the beam crossing angle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from betafunc_vertex.beamspot.parameters import BeamSpotParameters
from betafunc_vertex.conditions.watcher import ParameterWatcher
from betafunc_vertex.exceptions import ConfigurationError, LogicError
from betafunc_vertex.physics.boost import build_boost
from betafunc_vertex.physics.optics import beamspot_width

if TYPE_CHECKING:
    from betafunc_vertex.conditions.records import SimBeamSpotRecord
    from betafunc_vertex.conditions.source import BeamSpotConditions
    from betafunc_vertex.config import VertexSmearingConfig
    from betafunc_vertex.physics.boost import BoostMatrix
    from betafunc_vertex.random_source import GaussianSource

LOGGER = logging.getLogger(__name__)


class VertexSample(NamedTuple):
    """Lab-frame vertex of one event; lengths in mm, ``t`` as c * t in mm."""

    x: float
    y: float
    z: float
    t: float


class BeamVertexModel:
    """Beam-spot state, per-event vertex sampler and cached inverse boost.

    One instance belongs to one processing stream. Parameters are replaced
    wholesale, either from static configuration or from the conditions source
    at luminosity-block boundaries, and never while a sample is being drawn.
    """

    def __init__(self, config: VertexSmearingConfig | None = None):
        """
        Args:
            config: Static configuration. Unless it sets ``read_db`` the model
                is configured from it straight away; otherwise parameters
                arrive through :meth:`update` or :meth:`refresh_from_source`.
        """
        self.read_db = bool(config is not None and config.read_db)
        self._params: BeamSpotParameters | None = None
        self._boost: BoostMatrix | None = None
        self._watcher = ParameterWatcher()

        if config is not None and not self.read_db:
            self.configure_from(config)

    # ------------------------------------------------------------------
    # Parameter state
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> BeamSpotParameters:
        if self._params is None:
            raise LogicError("Beam-spot parameters have not been configured")
        return self._params

    @property
    def inv_lorentz_boost(self) -> BoostMatrix:
        """Boost from the head-on frame back to the lab frame (read-only)."""
        if self._boost is None:
            raise LogicError("Beam-spot parameters have not been configured")
        return self._boost

    @property
    def sigma_z(self) -> float:
        return self.parameters.sigma_z

    def configure(self, params: BeamSpotParameters) -> None:
        """Accept a full parameter set from static configuration and rebuild the boost.

        Raises:
            ConfigurationError: If ``params.sigma_z`` is not positive.
        """
        if params.sigma_z <= 0:
            raise ConfigurationError(
                f"Illegal resolution in Z: sigma_z must be positive, got {params.sigma_z}"
            )
        self._replace(params)

    def configure_from(self, config: VertexSmearingConfig) -> None:
        """Ingest a static configuration given in cm, ns and rad."""
        LOGGER.info("Configuring beam spot from static configuration")
        self.configure(BeamSpotParameters.from_config(config))

    def refresh_from_source(self, record: SimBeamSpotRecord) -> None:
        """
        Replace every parameter with the content of a conditions record.

        Raises:
            ConfigurationError: If the record describes a Gaussian beam spot,
                which carries no beta-function optics. The current parameters
                and boost are kept.
        """
        if record.is_gaussian:
            raise ConfigurationError(
                "The provided beam-spot record is Gaussian; a beta-function "
                "beam spot is required by this model"
            )
        self._replace(BeamSpotParameters.from_record(record))

    def update(self, conditions: BeamSpotConditions, run: int, lumi: int) -> bool:
        """
        Re-read the conditions at the start of a luminosity block.

        The record is only fetched when the validity interval differs from the
        one seen last. Nothing happens unless the model reads the database.

        Returns:
            True if the parameters were replaced.
        """
        if not self.read_db:
            return False
        interval, record = conditions.lookup(run, lumi)
        if not self._watcher.check(interval):
            return False
        LOGGER.info(f"Refreshing beam spot for run {run}, lumi {lumi} (valid {interval})")
        try:
            self.refresh_from_source(record)
        except ConfigurationError:
            # Forget the interval so the same record is checked again on the next call
            self._watcher.reset()
            raise
        return True

    def set_sigma_z(self, value: float) -> None:
        """
        Change the bunch length in place, in internal units.

        Raises:
            LogicError: If ``value`` is negative or NaN.
        """
        if not value >= 0:
            raise LogicError(f"Illegal resolution in Z: sigma_z must be a non-negative number, got {value}")
        self._params = self.parameters.with_sigma_z(value)
        LOGGER.debug(f"sigma_z set to {value}")

    def _replace(self, params: BeamSpotParameters) -> None:
        boost = build_boost(params.alpha, params.phi)
        self._params = params
        self._boost = boost
        LOGGER.debug(f"Beam-spot parameters replaced: {params}")

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def sample(self, source: GaussianSource) -> VertexSample:
        """
        Draw the vertex of one event.

        Z is drawn first since the transverse width depends on it; then X, Y
        and T. Exactly four Gaussian draws are taken from ``source``.
        """
        p = self.parameters

        z = source.gauss(0.0, p.sigma_z) + p.z0

        sigma_x = float(beamspot_width(z, p.z0, p.beta_star, p.emittance))
        x = source.gauss(0.0, sigma_x) + p.x0  # no z * dxdz slope term

        sigma_y = float(beamspot_width(z, p.z0, p.beta_star, p.emittance))
        y = source.gauss(0.0, sigma_y) + p.y0  # no z * dydz slope term

        t = source.gauss(0.0, p.sigma_z) + p.time_offset

        return VertexSample(x, y, z, t)

    vertex_shift = sample
