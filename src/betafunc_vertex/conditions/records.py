"""Record types served by the beam-spot conditions source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ValidityInterval:
    """Inclusive range of (run, luminosity block) over which a record is current."""

    first_run: int
    first_lumi: int
    last_run: int
    last_lumi: int

    def __post_init__(self):
        if (self.first_run, self.first_lumi) > (self.last_run, self.last_lumi):
            raise ValueError(f"Validity interval ends before it starts: {self}")

    def contains(self, run: int, lumi: int) -> bool:
        return (self.first_run, self.first_lumi) <= (run, lumi) <= (self.last_run, self.last_lumi)

    def __str__(self) -> str:
        return f"{self.first_run}:{self.first_lumi}-{self.last_run}:{self.last_lumi}"


@dataclass(frozen=True)
class SimBeamSpotRecord:
    """Simulated beam-spot conditions as stored, before unit conversion.

    Attributes:
        x, y, z: Reference vertex position [cm]
        sigma_z: Longitudinal bunch length [cm]
        beta_star: Beta function at the interaction point [cm]
        emittance: Geometric emittance [cm]
        alpha: Angle of the crossing plane to the x axis [rad]
        phi: Half crossing angle [rad]
        time_offset: Offset of the collision time [ns]
        is_gaussian: True if the record describes a purely Gaussian beam spot
            instead of beta-function optics
    """

    x: float
    y: float
    z: float
    sigma_z: float
    beta_star: float
    emittance: float
    alpha: float
    phi: float
    time_offset: float
    is_gaussian: bool = False
