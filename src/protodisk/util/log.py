import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logger(level=logging.INFO, stream=None):
    """
    Send protodisk log records to a stream (stdout by default). The library
    itself only creates module loggers and never adds handlers.
    """
    logger = logging.getLogger("protodisk")
    logger.setLevel(level)
    if not any(getattr(handler, "_protodisk", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._protodisk = True
        logger.addHandler(handler)
    return logger
