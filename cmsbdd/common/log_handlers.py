"""
Log Handlers

Configures the shared "cmsbdd" logger used by every module of the library.
"""
import logging

LOGGER_NAME = "cmsbdd"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(module)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def init_logging(logger_name: str = LOGGER_NAME, level="INFO") -> logging.Logger:
    """Set up logging with a single stream handler and the standard formatter"""
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in logger.handlers:
        handler.setFormatter(formatter)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    logger.info("Logging handler established")
    return logger
