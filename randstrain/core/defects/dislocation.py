"""
Edge dislocations in a 2D square lattice.

This module provides the concrete ``Dislocation2D`` and the standard sets of
Burgers vectors used when sampling random ensembles.
"""

import math
from typing import Tuple

from ..vectors import Vector2D
from .base import AbstractDislocation


class Dislocation2D(AbstractDislocation):
    """
    Edge dislocation aligned along z, piercing the xy-plane.

    Parameters
    ----------
    burgers_vector : Vector2D
        Burgers vector ``b``.
    origin : Vector2D
        Core position. For random ensembles this is a plaquette centre,
        i.e. half-integer coordinates, so it never coincides with a site.

    Examples
    --------
    >>> dis = Dislocation2D(Vector2D(1., 0.), Vector2D(4.5, 4.5))
    >>> image = dis.shift(Vector2D(16., 0.))
    >>> image.origin
    Vector2D(20.5, 4.5)
    >>> dis.origin
    Vector2D(4.5, 4.5)

    Notes
    -----
    Instances are immutable. Periodic images are separate objects created by
    ``shift``; they never share state with the canonical dislocation.
    """

    __slots__ = ('_burgers_vector', '_origin')

    def __init__(self, burgers_vector: Vector2D, origin: Vector2D):
        if not isinstance(burgers_vector, Vector2D):
            raise TypeError("burgers_vector must be a Vector2D instance")
        if not isinstance(origin, Vector2D):
            raise TypeError("origin must be a Vector2D instance")

        object.__setattr__(self, '_burgers_vector', burgers_vector)
        object.__setattr__(self, '_origin', origin)

    def __setattr__(self, name, value):
        raise AttributeError("Dislocation2D is immutable")

    @property
    def burgers_vector(self) -> Vector2D:
        return self._burgers_vector

    @property
    def origin(self) -> Vector2D:
        return self._origin

    def shift(self, delta: Vector2D) -> 'Dislocation2D':
        """Periodic image (or any translate) of this dislocation."""
        return Dislocation2D(self._burgers_vector, self._origin + delta)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dislocation2D):
            return NotImplemented
        return (self._burgers_vector == other._burgers_vector
                and self._origin == other._origin)

    def __hash__(self) -> int:
        return hash((self._burgers_vector, self._origin))

    def __reduce__(self):
        return (Dislocation2D, (self._burgers_vector, self._origin))


# Allowed Burgers vectors for a tetragonal (square) lattice
TETRAGONAL_BURGERS_VECTORS: Tuple[Vector2D, ...] = (
    Vector2D(1.0, 0.0),
    Vector2D(-1.0, 0.0),
    Vector2D(0.0, 1.0),
    Vector2D(0.0, -1.0),
)

_INV_SQRT2 = 1.0 / math.sqrt(2.0)

DIAGONAL_BURGERS_VECTORS: Tuple[Vector2D, ...] = (
    Vector2D(_INV_SQRT2, _INV_SQRT2),
    Vector2D(-_INV_SQRT2, -_INV_SQRT2),
    Vector2D(-_INV_SQRT2, _INV_SQRT2),
    Vector2D(_INV_SQRT2, -_INV_SQRT2),
)

COMBINED_BURGERS_VECTORS: Tuple[Vector2D, ...] = (
    TETRAGONAL_BURGERS_VECTORS + DIAGONAL_BURGERS_VECTORS
)
