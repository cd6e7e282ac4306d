"""
Utilities.
"""

from .logging_config import setup_logging, PACKAGE_LOGGER

__all__ = ['setup_logging', 'PACKAGE_LOGGER']
