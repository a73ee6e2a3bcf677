"""
JSON logging for the services.
"""
import logging

from pythonjsonlogger.json import JsonFormatter

from storefront import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level=None):
    """Attach a JSON stream handler to the package logger, once per process."""
    logger = logging.getLogger("storefront")
    logger.setLevel(level or config.log_level())
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
