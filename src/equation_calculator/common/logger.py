"""Project-wide logger."""
import logging
import sys
from typing import Union

LOGGER_NAME: str = "equation_calculator"
LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(processName)s | %(message)s"
DATE_FORMAT: str = "%H:%M:%S"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach a stderr handler to the project logger and set its level.

    Calling it again only updates the level, no duplicate handler is added.

    :param level: Logging level, as a number or a name such as ``"DEBUG"``

    :return: The configured project logger
    :rtype: logging.Logger
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
