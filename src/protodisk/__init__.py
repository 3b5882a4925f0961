"""Planetary system generation by Dole's stochastic accretion model.

>>> from protodisk import Accrete
>>> system = Accrete(seed=1).planetary_system()
"""

from protodisk.accrete import (
    Accrete,
    AccretionEngine,
    CollisionResolver,
    DustBand,
    DustBandTable,
    EnvironmentClassifier,
    MoonCapturePolicy,
    PostAccretionBombardment,
    StellarEnvironment,
    Universe,
    coalesce,
    create_universe,
)
from protodisk.base import Planetesimal, Ring, Star, StellarParams, System
from protodisk.events import AccretionEvent, EventLog
from protodisk.exceptions import (
    DustBandInvariantError,
    FinalizedSystemError,
    InvariantViolation,
    PlanetOrderError,
    ProtodiskError,
)

__all__ = [
    "Accrete",
    "AccretionEngine",
    "AccretionEvent",
    "CollisionResolver",
    "DustBand",
    "DustBandInvariantError",
    "DustBandTable",
    "EnvironmentClassifier",
    "EventLog",
    "FinalizedSystemError",
    "InvariantViolation",
    "MoonCapturePolicy",
    "PlanetOrderError",
    "Planetesimal",
    "PostAccretionBombardment",
    "ProtodiskError",
    "Ring",
    "Star",
    "StellarEnvironment",
    "StellarParams",
    "System",
    "Universe",
    "coalesce",
    "create_universe",
]
