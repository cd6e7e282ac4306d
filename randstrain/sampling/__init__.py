"""
Random dislocation ensembles.

- RandomDislocation / UniformBurgersVector: single random dislocations
- collect_dislocations: charge-neutral sets with distinct origins
- RandomStrainDistribution / RandomDislocationDistribution: whole configurations
"""

from .base import RandomDislocation, RandomStrainDistribution
from .uniform import (
    UniformBurgersVector,
    collect_dislocations,
    RandomDislocationDistribution,
)

__all__ = [
    # Interfaces
    'RandomDislocation',
    'RandomStrainDistribution',

    # Uniform ensembles
    'UniformBurgersVector',
    'collect_dislocations',
    'RandomDislocationDistribution',
]
