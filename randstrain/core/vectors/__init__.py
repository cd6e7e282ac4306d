"""
Vector module.

Value-typed vectors used for positions, Burgers vectors and periodic image
shifts, plus the periodic boundary helpers built on them.

Available types:
- AbstractPhysicalVector: interface shared by physical vectors
- Vector2D: immutable two-component real vector
"""

from .base import AbstractPhysicalVector
from .vector2d import Vector2D
from .periodic import (
    BoundaryCondition,
    subtract_pbc,
    subtract_pbc_vector,
    displacement,
)

__all__ = [
    'AbstractPhysicalVector',
    'Vector2D',
    'BoundaryCondition',
    'subtract_pbc',
    'subtract_pbc_vector',
    'displacement',
]
