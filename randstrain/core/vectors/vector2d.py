"""
Two-dimensional real vectors.

``Vector2D`` is the geometric primitive for every strain calculation: lattice
sites, dislocation origins, Burgers vectors and periodic image shifts are all
``Vector2D`` instances.
"""

import numbers
from typing import Iterable, Iterator, Tuple

import numpy as np

from .base import AbstractPhysicalVector


class Vector2D(AbstractPhysicalVector):
    """
    Immutable 2D vector with real components.

    Parameters
    ----------
    x, y : float
        Cartesian components. Both are promoted to ``float``.

    Examples
    --------
    >>> A = Vector2D(1, 2.)
    >>> B = Vector2D(3., 4.)
    >>> A + B
    Vector2D(4.0, 6.0)
    >>> A.dot(B)
    11.0
    >>> 2 * A == A * 2
    True
    >>> B.magnitude()
    5.0

    Notes
    -----
    Instances are hashable and compare by exact component equality, so they
    can be used as dictionary keys and set members (e.g. for checking that
    dislocation origins are unique).
    """

    __slots__ = ('_x', '_y')

    # numpy scalars defer to __rmul__ instead of treating us as a sequence
    __array_ufunc__ = None

    def __init__(self, x: float, y: float):
        if not isinstance(x, numbers.Real) or not isinstance(y, numbers.Real):
            raise TypeError(f"Vector2D components must be real numbers, got "
                            f"({type(x).__name__}, {type(y).__name__})")
        object.__setattr__(self, '_x', float(x))
        object.__setattr__(self, '_y', float(y))

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> 'Vector2D':
        """Build a vector from any two-element iterable (tuple, list, array)."""
        x, y = values
        return cls(x, y)

    @classmethod
    def zero_vector(cls) -> 'Vector2D':
        """The zero vector ``(0, 0)``."""
        return cls(0.0, 0.0)

    def zero_like(self) -> 'Vector2D':
        return Vector2D(0.0, 0.0)

    def __setattr__(self, name, value):
        raise AttributeError("Vector2D is immutable")

    def __delattr__(self, name):
        raise AttributeError("Vector2D is immutable")

    @property
    def x(self) -> float:
        """x component."""
        return self._x

    @property
    def y(self) -> float:
        """y component."""
        return self._y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self._x + other._x, self._y + other._y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        # Same result as the derived ``self + (-1 * other)`` without the
        # intermediate vector
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self._x - other._x, self._y - other._y)

    def __mul__(self, scalar) -> 'Vector2D':
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector2D(scalar * self._x, scalar * self._y)

    def __rmul__(self, scalar) -> 'Vector2D':
        return self.__mul__(scalar)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self._x, -self._y)

    def dot(self, other: 'Vector2D') -> float:
        return self._x * other._x + self._y * other._y

    def magnitude2(self) -> float:
        return self._x * self._x + self._y * self._y

    def __iter__(self) -> Iterator[float]:
        yield self._x
        yield self._y

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int) -> float:
        return (self._x, self._y)[index]

    def as_tuple(self) -> Tuple[float, float]:
        """Components as a plain ``(x, y)`` tuple."""
        return (self._x, self._y)

    def as_array(self) -> np.ndarray:
        """Components as a new ``np.ndarray`` of shape (2,)."""
        return np.array([self._x, self._y])

    def __reduce__(self):
        return (Vector2D, (self._x, self._y))

    def __repr__(self) -> str:
        return f"Vector2D({self._x!r}, {self._y!r})"
