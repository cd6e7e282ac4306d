"""
Disorder configurations.

Available configurations:
- ShearFromDislocations: B1g / B2g shears (and splitting) of edge dislocations
"""

from .base import DisorderConfiguration
from .shear_from_dislocations import (
    ShearFromDislocations,
    generate_disorder,
    DEFAULT_ASSEMBLY_ATOL,
    B1G_CHANNEL,
    B2G_CHANNEL,
    SPLITTING_CHANNEL,
)

__all__ = [
    'DisorderConfiguration',
    'ShearFromDislocations',
    'generate_disorder',
    'DEFAULT_ASSEMBLY_ATOL',
    'B1G_CHANNEL',
    'B2G_CHANNEL',
    'SPLITTING_CHANNEL',
]
