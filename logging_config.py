"""
Logging Configuration
Console logging for the graphical LP app. The level comes from the
GRAPHICAL_LP_LOG_LEVEL environment variable unless one is passed in.
"""
import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "graphical_lp"
LEVEL_ENV_VAR = "GRAPHICAL_LP_LOG_LEVEL"
DEFAULT_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Optional[Union[int, str]] = None) -> int:
    """Level from the argument, else the environment; unknown names give INFO."""
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else DEFAULT_LEVEL


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stdout handler to the 'graphical_lp' logger.

    Streamlit runs the script again on every interaction, so an existing
    handler is reused and only its level is updated.
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    handler = next((h for h in logger.handlers if getattr(h, "_graphical_lp", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        handler._graphical_lp = True
        logger.addHandler(handler)
        logger.debug("Logging initialized at %s", logging.getLevelName(level))
    handler.setLevel(level)
    return logger
