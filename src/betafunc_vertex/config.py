# src/betafunc_vertex/config.py
"""
Configuration for the beta-function vertex smearing model.

Values are kept exactly as the user supplied them (cm, ns, rad). Conversion
to the internal unit system happens when the parameters are ingested by
:class:`~betafunc_vertex.beamspot.parameters.BeamSpotParameters`.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from betafunc_vertex.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

LOGGER = logging.getLogger(__name__)

# =============================================================================
# PARAMETER DESCRIPTIONS
# =============================================================================

# Configuration key -> (dataclass field, default, comment)
PARAMETER_KEYS: dict[str, tuple[str, float | bool, str]] = {
    "X0": ("x0", 0.0, "in cm"),
    "Y0": ("y0", 0.0, "in cm"),
    "Z0": ("z0", 0.0, "in cm"),
    "SigmaZ": ("sigma_z", 0.0, "in cm"),
    "BetaStar": ("beta_star", 0.0, "in cm"),
    "Emittance": ("emittance", 0.0, "in cm"),  # geometric, not normalised
    "Alpha": ("alpha", 0.0, "in radians"),
    "Phi": ("phi", 0.0, "in radians"),
    "TimeOffset": ("time_offset", 0.0, "in ns"),
    "readDB": ("read_db", False, "take the beam spot from the conditions source"),
}

# Keys understood by the surrounding generator but irrelevant to the smearing
IGNORED_KEYS = frozenset({"src"})

FLAG_SPELLINGS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}


@dataclass(frozen=True)
class VertexSmearingConfig:
    """Static configuration of the vertex smearing, in user units.

    Attributes:
        x0, y0, z0: Reference vertex position [cm]
        sigma_z: Longitudinal bunch length [cm]
        beta_star: Beta function at the interaction point [cm]
        emittance: Geometric emittance [cm]
        alpha: Angle of the crossing plane to the x axis [rad]
        phi: Half crossing angle [rad]
        time_offset: Offset of the collision time [ns]
        read_db: If True, ignore the values above and use the conditions source
    """

    x0: float = 0.0
    y0: float = 0.0
    z0: float = 0.0
    sigma_z: float = 0.0
    beta_star: float = 0.0
    emittance: float = 0.0
    alpha: float = 0.0
    phi: float = 0.0
    time_offset: float = 0.0
    read_db: bool = False

    def __post_init__(self):
        for fld in fields(self):
            if fld.name == "read_db":
                continue
            value = getattr(self, fld.name)
            if not math.isfinite(value):
                raise ConfigurationError(
                    f"Configuration value {fld.name}={value!r} is not a finite number"
                )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> VertexSmearingConfig:
        """Build a configuration from a key-value mapping using the public key names.

        Args:
            mapping: Mapping of configuration keys (``X0``, ``SigmaZ``, ...) to values

        Returns:
            The parsed configuration, with defaults for any missing key.
        """
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            if key in IGNORED_KEYS:
                LOGGER.debug(f"Ignoring configuration key {key!r}")
                continue
            if key not in PARAMETER_KEYS:
                raise ConfigurationError(f"Unknown configuration key {key!r}")
            name, default, _ = PARAMETER_KEYS[key]
            if isinstance(default, bool):
                kwargs[name] = _parse_flag(key, value)
                continue
            try:
                kwargs[name] = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    f"Configuration key {key!r} expects a number, got {value!r}"
                ) from exc
        config = cls(**kwargs)
        LOGGER.debug(f"Parsed vertex smearing configuration: {config}")
        return config

    def to_mapping(self) -> dict[str, float | bool]:
        """Return the configuration keyed by the public key names."""
        return {key: getattr(self, name) for key, (name, _, _) in PARAMETER_KEYS.items()}


def _parse_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in FLAG_SPELLINGS:
        return FLAG_SPELLINGS[value.strip().lower()]
    raise ConfigurationError(f"Configuration key {key!r} expects a boolean, got {value!r}")


def describe_parameters() -> dict[str, tuple[float | bool, str]]:
    """Return the default value and unit comment of every configuration key."""
    return {key: (default, comment) for key, (_, default, comment) in PARAMETER_KEYS.items()}


def load_config(path: str | Path) -> VertexSmearingConfig:
    """
    Read a vertex smearing configuration from a JSON file.

    Args:
        path: JSON file holding a single object of configuration keys.

    Returns:
        The parsed configuration.
    """
    LOGGER.info(f"Reading vertex smearing configuration from {path}")
    with Path(path).open("r") as f:
        content = json.load(f)
    if not isinstance(content, dict):
        raise ConfigurationError(f"Expected a JSON object in {path}, got {type(content).__name__}")
    return VertexSmearingConfig.from_mapping(content)
