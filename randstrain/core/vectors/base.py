"""
Abstract base class for physical vectors.

This module defines the interface that all vector types used by the strain
calculations must implement. Only a handful of operations are required;
everything else (subtraction, division, magnitudes, normalization) is
derived from them once, here.
"""

import math
from abc import ABC, abstractmethod


class AbstractPhysicalVector(ABC):
    """
    Abstract base class for vectors commonly used in physics.

    Required methods
    ----------------
    Subclasses must define:
    - Equality:              ``__eq__(other)``
    - Addition:              ``__add__(other)``
    - Scalar multiplication: ``__mul__(scalar)``
    - Scalar product:        ``dot(other)``
    - Zero vector:           ``zero_like()``

    Derived methods
    ---------------
    Written in terms of the required ones:
    - ``scalar * vector``, ``vector - vector``, ``-vector``, ``vector / scalar``
    - ``vector @ vector`` (alias for ``dot``)
    - ``magnitude2``, ``magnitude``, ``normalize``, ``unit``

    Notes
    -----
    Vectors are value types: every operation returns a new instance and
    never modifies its operands.
    """

    __slots__ = ()

    @abstractmethod
    def __eq__(self, other) -> bool:
        """Exact component-wise equality."""
        pass

    @abstractmethod
    def __add__(self, other: 'AbstractPhysicalVector') -> 'AbstractPhysicalVector':
        """Vector addition."""
        pass

    @abstractmethod
    def __mul__(self, scalar) -> 'AbstractPhysicalVector':
        """Multiplication by a real scalar."""
        pass

    @abstractmethod
    def dot(self, other: 'AbstractPhysicalVector') -> float:
        """Scalar (dot) product."""
        pass

    @abstractmethod
    def zero_like(self) -> 'AbstractPhysicalVector':
        """Zero vector of the same type as ``self``."""
        pass

    def __rmul__(self, scalar) -> 'AbstractPhysicalVector':
        return self.__mul__(scalar)

    def __neg__(self) -> 'AbstractPhysicalVector':
        return self * -1

    def __sub__(self, other: 'AbstractPhysicalVector') -> 'AbstractPhysicalVector':
        if not isinstance(other, AbstractPhysicalVector):
            return NotImplemented
        return self + (-1 * other)

    def __truediv__(self, scalar) -> 'AbstractPhysicalVector':
        return self * (1 / scalar)

    def __matmul__(self, other: 'AbstractPhysicalVector') -> float:
        return self.dot(other)

    def magnitude2(self) -> float:
        """Squared magnitude, ``self · self``."""
        return self.dot(self)

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.magnitude2())

    def normalize(self) -> 'AbstractPhysicalVector':
        """
        Divide the vector by its length.

        Raises
        ------
        ZeroDivisionError
            For the zero vector. Callers must not normalize zero vectors.
        """
        return self / self.magnitude()

    def unit(self) -> 'AbstractPhysicalVector':
        """Alias for :meth:`normalize`."""
        return self.normalize()
