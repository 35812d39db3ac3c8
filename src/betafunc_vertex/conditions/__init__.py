"""Versioned beam-spot conditions keyed by run and luminosity-block validity.

Records in this package are expressed in the units they are stored in
(cm, ns, rad); conversion happens when the model ingests them.
"""

from betafunc_vertex.conditions.records import SimBeamSpotRecord, ValidityInterval
from betafunc_vertex.conditions.source import BeamSpotConditions
from betafunc_vertex.conditions.watcher import ParameterWatcher

__all__ = ["BeamSpotConditions", "ParameterWatcher", "SimBeamSpotRecord", "ValidityInterval"]
