"""
Periodic boundary condition helpers.

Subtraction on a ring of finite size (nearest-image convention) and the
boundary-condition policy used to pick how displacements between a lattice
site and a dislocation are formed.
"""

from enum import Enum
from typing import Optional, Union

import numpy as np

from .vector2d import Vector2D

ArrayLike = Union[float, np.ndarray]


class BoundaryCondition(Enum):
    """
    How a finite simulation cell is continued beyond its edges.

    FREE
        Open boundaries. Displacements are plain differences and only the
        dislocation itself contributes.
    MINIMUM_IMAGE
        Periodic cell, but only the nearest periodic image of each
        dislocation contributes (displacement from ``subtract_pbc``).
    PERIODIC
        Periodic cell with every periodic image summed (see
        ``randstrain.fields.pbc``).
    """
    FREE = 'free'
    MINIMUM_IMAGE = 'minimum_image'
    PERIODIC = 'periodic'

    @property
    def is_periodic(self) -> bool:
        return self is not BoundaryCondition.FREE


def _check_axis_size(axis_size) -> None:
    if axis_size <= 0:
        raise ValueError(f"axis_size must be positive, got {axis_size}")


def subtract_pbc(x1: ArrayLike, x0: ArrayLike, axis_size: float) -> ArrayLike:
    """
    Subtraction ``x1 - x0`` on a ring of size ``axis_size``.

    The result is folded into ``[-axis_size/2, axis_size/2]``; values lying
    exactly on either end of that interval are left unchanged.

    Parameters
    ----------
    x1, x0 : float or np.ndarray
        Coordinates along one periodic axis (broadcast together).
    axis_size : float
        Period of the axis.

    Returns
    -------
    difference : float or np.ndarray
        Nearest-image difference. A float for scalar inputs.

    Examples
    --------
    >>> subtract_pbc(2., 1., axis_size=10)
    1.0
    >>> subtract_pbc(7., 1., axis_size=10)
    -4.0
    >>> subtract_pbc(1., 8., axis_size=10)
    3.0
    """
    _check_axis_size(axis_size)

    value = np.subtract(x1, x0, dtype=float)
    half = 0.5 * axis_size

    # Number of whole periods to remove from each value
    periods = np.where(value > half,
                       np.ceil((value - half) / axis_size),
                       np.where(value < -half,
                                np.floor((value + half) / axis_size),
                                0.0))
    wrapped = value - periods * axis_size

    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped


def subtract_pbc_vector(A: Vector2D, B: Vector2D,
                        Lx: float, Ly: Optional[float] = None) -> Vector2D:
    """
    ``Vector2D`` subtraction ``A - B`` with periodic boundary conditions.

    Parameters
    ----------
    A, B : Vector2D
        Positions in the periodic cell.
    Lx : float
        Period along x.
    Ly : float, optional
        Period along y (default: ``Lx``).

    Examples
    --------
    >>> subtract_pbc_vector(Vector2D(1., 2.), Vector2D(7., 9.), Lx=10)
    Vector2D(4.0, 3.0)
    """
    Ly = Lx if Ly is None else Ly
    return Vector2D(subtract_pbc(A.x, B.x, Lx), subtract_pbc(A.y, B.y, Ly))


def displacement(position: Vector2D, source: Vector2D,
                 boundary: BoundaryCondition = BoundaryCondition.FREE,
                 Lx: Optional[float] = None,
                 Ly: Optional[float] = None) -> Vector2D:
    """
    Displacement from ``source`` to ``position`` under a boundary policy.

    ``FREE`` and ``PERIODIC`` use the plain difference (for ``PERIODIC`` the
    image sum supplies the other images). ``MINIMUM_IMAGE`` folds the
    difference into the cell and requires ``Lx``.
    """
    if boundary is BoundaryCondition.MINIMUM_IMAGE:
        if Lx is None:
            raise ValueError("MINIMUM_IMAGE boundary requires the cell size Lx")
        return subtract_pbc_vector(position, source, Lx, Ly)
    return position - source
