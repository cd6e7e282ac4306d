"""
Abstract base classes for crystal defects.

Defects are purely geometric/topological objects: they know where they sit
and what discontinuity they carry, but nothing about the fields they induce.
Fields are computed by ``randstrain.fields``.
"""

from abc import ABC, abstractmethod

from ..vectors import Vector2D


class AbstractCrystalDefect(ABC):
    """Parent class for all crystal defects."""

    __slots__ = ()


class AbstractDislocation(AbstractCrystalDefect):
    """
    Parent class for all dislocations.

    Required methods
    ----------------
    burgers_vector : property
        The Burgers vector (displacement discontinuity) of the dislocation.
    origin : property
        Location of the dislocation core.
    shift(delta)
        A new dislocation with the same Burgers vector and the origin moved
        by ``delta``. Must not modify ``self``.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def burgers_vector(self) -> Vector2D:
        pass

    @property
    @abstractmethod
    def origin(self) -> Vector2D:
        pass

    @abstractmethod
    def shift(self, delta: Vector2D) -> 'AbstractDislocation':
        pass

    def __repr__(self) -> str:
        name = self.__class__.__name__
        b, r = self.burgers_vector, self.origin
        return f"{name}(b=({b.x:g}, {b.y:g}), origin=({r.x:g}, {r.y:g}))"
