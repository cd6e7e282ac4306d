"""
Logging setup for scripts and notebooks using randstrain.

The library itself only creates module loggers under the ``randstrain``
namespace; nothing is printed until an application calls ``setup_logging``.
"""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = 'randstrain'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package logger.

    Parameters
    ----------
    level : int or str, optional
        Logging level, e.g. ``logging.DEBUG`` or ``'DEBUG'``.
    log_file : str, optional
        Also write records to this file (overwritten).

    Returns
    -------
    logger : logging.Logger
        The ``randstrain`` logger.

    Notes
    -----
    Calling this again replaces the handlers installed by the previous call,
    so records are never duplicated.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = numeric

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}")
    return logger
