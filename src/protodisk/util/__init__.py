__all__ = ["dole", "misc", "init_logger"]

from . import dole, misc
from .log import init_logger
