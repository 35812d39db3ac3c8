"""Public interface for the betafunc_vertex package.

The package smears the primary collision vertex of simulated events according
to a beta-function optics model of the interaction region, and provides the
Lorentz boost between the lab frame and the head-on collision frame.
"""

from betafunc_vertex.exceptions import ConfigurationError, LogicError
from betafunc_vertex.model import BeamVertexModel, VertexSample

__all__ = ["BeamVertexModel", "ConfigurationError", "LogicError", "VertexSample"]
