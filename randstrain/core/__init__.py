"""
Core domain models for the randstrain package.

This module contains the fundamental abstractions:
- Vectors: 2D value-typed geometry and periodic boundary helpers
- Defects: dislocations (Burgers vector + core position)

These are the building blocks used by the field functions, the periodic
image summation and the ensemble sampling.
"""

from .vectors import (
    AbstractPhysicalVector,
    Vector2D,
    BoundaryCondition,
    subtract_pbc,
    subtract_pbc_vector,
    displacement,
)

from .defects import (
    AbstractCrystalDefect,
    AbstractDislocation,
    Dislocation2D,
    TETRAGONAL_BURGERS_VECTORS,
    DIAGONAL_BURGERS_VECTORS,
    COMBINED_BURGERS_VECTORS,
)

__all__ = [
    # Vectors
    'AbstractPhysicalVector',
    'Vector2D',
    'BoundaryCondition',
    'subtract_pbc',
    'subtract_pbc_vector',
    'displacement',

    # Defects
    'AbstractCrystalDefect',
    'AbstractDislocation',
    'Dislocation2D',
    'TETRAGONAL_BURGERS_VECTORS',
    'DIAGONAL_BURGERS_VECTORS',
    'COMBINED_BURGERS_VECTORS',
]
