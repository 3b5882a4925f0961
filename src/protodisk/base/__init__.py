__all__ = ["Planetesimal", "Ring", "Star", "StellarParams", "System"]

from .planet import Planetesimal, Ring
from .star import StellarParams, Star
from .system import System
