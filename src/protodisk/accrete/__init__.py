__all__ = [
    "Accrete",
    "AccretionEngine",
    "CollisionResolver",
    "DustBand",
    "DustBandTable",
    "EnvironmentClassifier",
    "MoonCapturePolicy",
    "PostAccretionBombardment",
    "StellarEnvironment",
    "Universe",
    "coalesce",
    "create_universe",
]

from .accrete import Accrete
from .bombardment import PostAccretionBombardment
from .classify import EnvironmentClassifier
from .collision import CollisionResolver, MoonCapturePolicy, coalesce
from .dust import DustBand, DustBandTable
from .engine import AccretionEngine
from .environment import StellarEnvironment
from .universe import Universe, create_universe
