"""
Opt-in log output for tabledust.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``tabledust`` namespace and never install handlers. Scripts that want to see
sprinkle, pagination and save messages call ``setup_logging`` once.

Usage
-----
>>> from tabledust.logging_utils import setup_logging
>>> logger = setup_logging(Path("results") / "tables.log")
"""

import logging
import os
import sys
from pathlib import Path

LOGGER_NAME = 'tabledust'

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


def _get_log_level_from_env():
    """Level named by TABLEDUST_LOG_LEVEL; INFO when unset or unrecognised."""
    return _LEVELS.get(os.environ.get('TABLEDUST_LOG_LEVEL', 'INFO').upper(), logging.INFO)


def setup_logging(log_file=None, level=None, console=True):
    """
    Attach handlers to the ``tabledust`` logger.

    Parameters
    ----------
    log_file : str or Path, optional
        Also write to this file (parent directories are created).
    level : int, optional
        Defaults to the TABLEDUST_LOG_LEVEL environment variable.
    console : bool, default=True
        Write to stdout.

    Returns
    -------
    logging.Logger
        The package logger. Calling again replaces its handlers.
    """
    if level is None:
        level = _get_log_level_from_env()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []
    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handlers = []
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='w'))
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Messages stop at the package logger
    logger.propagate = False
    return logger


__all__ = [
    'LOGGER_NAME',
    'setup_logging',
]
