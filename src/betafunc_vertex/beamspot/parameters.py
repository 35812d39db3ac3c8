# src/betafunc_vertex/beamspot/parameters.py
"""
Beam-spot geometry and optics in the internal unit system.

This is the only place where external values (configuration or conditions
records) are converted to internal units. Each field is ingested as a
:class:`~betafunc_vertex.units.Quantity` carrying its own scale factor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import InitVar, dataclass, fields, replace
from typing import TYPE_CHECKING

from betafunc_vertex.exceptions import ConfigurationError
from betafunc_vertex.units import centimetres, nanoseconds, radians

if TYPE_CHECKING:
    from betafunc_vertex.conditions.records import SimBeamSpotRecord
    from betafunc_vertex.config import VertexSmearingConfig
    from betafunc_vertex.units import Quantity

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeamSpotParameters:
    """Beam-spot state used by the vertex sampler and the boost builder.

    Lengths are in mm, ``time_offset`` is c * t in mm and angles are in rad.
    """

    x0: float
    y0: float
    z0: float
    sigma_z: float
    beta_star: float
    emittance: float
    time_offset: float = 0.0
    alpha: float = 0.0
    phi: float = 0.0
    allow_zero_sigma_z: InitVar[bool] = False

    def __post_init__(self, allow_zero_sigma_z: bool):
        self.validate(allow_zero_sigma_z)

    def validate(self, allow_zero_sigma_z: bool = False) -> None:
        """Check the invariants of the optics model.

        Raises:
            ConfigurationError: If any value is non-finite, ``sigma_z`` or
                ``beta_star`` is not positive, or ``emittance`` is negative.
                A zero ``sigma_z`` passes when ``allow_zero_sigma_z`` is set.
        """
        for fld in fields(self):
            value = getattr(self, fld.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"Beam-spot parameter {fld.name}={value!r} is not finite")
        if self.sigma_z < 0 or (self.sigma_z == 0 and not allow_zero_sigma_z):
            raise ConfigurationError(
                f"Illegal resolution in Z: sigma_z must be positive, got {self.sigma_z}"
            )
        if self.beta_star <= 0:
            raise ConfigurationError(f"beta_star must be positive, got {self.beta_star}")
        if self.emittance < 0:
            raise ConfigurationError(f"emittance must be non-negative, got {self.emittance}")

    def with_sigma_z(self, sigma_z: float) -> BeamSpotParameters:
        """Copy with only ``sigma_z`` replaced; the value is already in internal units.

        Zero is accepted here: it turns longitudinal smearing off.
        """
        return replace(self, sigma_z=float(sigma_z), allow_zero_sigma_z=True)

    @classmethod
    def from_quantities(cls, **quantities: Quantity) -> BeamSpotParameters:
        """Scale every tagged external value into internal units, once."""
        params = cls(**{name: quantity.to_internal() for name, quantity in quantities.items()})
        LOGGER.debug(f"Ingested beam-spot parameters: {params}")
        return params

    @classmethod
    def from_config(cls, config: VertexSmearingConfig) -> BeamSpotParameters:
        return cls.from_quantities(
            x0=centimetres(config.x0),
            y0=centimetres(config.y0),
            z0=centimetres(config.z0),
            sigma_z=centimetres(config.sigma_z),
            beta_star=centimetres(config.beta_star),
            emittance=centimetres(config.emittance),
            time_offset=nanoseconds(config.time_offset),
            alpha=radians(config.alpha),
            phi=radians(config.phi),
        )

    @classmethod
    def from_record(cls, record: SimBeamSpotRecord) -> BeamSpotParameters:
        return cls.from_quantities(
            x0=centimetres(record.x),
            y0=centimetres(record.y),
            z0=centimetres(record.z),
            sigma_z=centimetres(record.sigma_z),
            beta_star=centimetres(record.beta_star),
            emittance=centimetres(record.emittance),
            time_offset=nanoseconds(record.time_offset),
            alpha=radians(record.alpha),
            phi=radians(record.phi),
        )
