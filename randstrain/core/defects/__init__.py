"""
Crystal defect module.

Available defects:
- Dislocation2D: edge dislocation with Burgers vector and core position
"""

from .base import AbstractCrystalDefect, AbstractDislocation
from .dislocation import (
    Dislocation2D,
    TETRAGONAL_BURGERS_VECTORS,
    DIAGONAL_BURGERS_VECTORS,
    COMBINED_BURGERS_VECTORS,
)

__all__ = [
    'AbstractCrystalDefect',
    'AbstractDislocation',
    'Dislocation2D',
    'TETRAGONAL_BURGERS_VECTORS',
    'DIAGONAL_BURGERS_VECTORS',
    'COMBINED_BURGERS_VECTORS',
]
