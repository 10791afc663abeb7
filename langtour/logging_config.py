"""
Logging Configuration

One entry point, ``setup_logging``, used by the notebook and the scripts.
Library modules only call ``logging.getLogger(__name__)`` and never add
handlers themselves.
"""
import logging
import sys
from typing import List, Optional

LOGGER_NAME = "langtour"
LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _detach_handlers(logger: logging.Logger) -> None:
    # close before removing so a previous log file is released
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _make_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again (re-running the first notebook cell, say) replaces the
    previous handlers instead of adding to them.

    Parameters
    ----------
    level : int
        Logging level (e.g. logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to also write the log to; the file is truncated

    Returns
    -------
    logging.Logger
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _detach_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _make_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (level %s)", logging.getLevelName(level))
    return logger
