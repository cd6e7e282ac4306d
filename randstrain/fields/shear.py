r"""
Shear strain fields of edge dislocations.

Closed-form B1g and B2g shear strains of a single edge dislocation aligned
along z, together with the level splitting built from them.

Convention
----------
With ``r`` the displacement from the dislocation core to the evaluation
point and ``b`` the Burgers vector, in units of :math:`1/(1-\sigma)` for a
Poisson ratio :math:`\sigma`:

.. math::

    \varepsilon_{B_{1g}} = \frac{(b \cdot r)(r_x^2 - r_y^2)}{2\pi |r|^4},
    \qquad
    \varepsilon_{B_{2g}} = -\frac{(b \cdot r)\,2 r_x r_y}{2\pi |r|^4}.

Both fields are homogeneous of degree -1 (long-ranged, with angular
dependence) and singular at the core ``r = 0``. The singularity is not
guarded: scalar functions raise ``ZeroDivisionError`` and array kernels
return ``inf``/``nan``.

Every channel exists in three forms:
- ``b1g_shear(r, b)``: scalar, from a displacement ``Vector2D``
- ``b1g_shear_field(position, dislocation)``: scalar field function with the
  signature expected by ``randstrain.fields.pbc.pbc_field``
- ``b1g_kernel(rx, ry, bx, by)``: numpy kernel on arrays of displacements
"""

import math
from typing import Callable, NamedTuple, Optional, Tuple, Union

import numpy as np

from ..core.vectors import Vector2D, BoundaryCondition, displacement
from ..core.defects import AbstractDislocation

ArrayLike = Union[float, np.ndarray]

_INV_2PI = 1.0 / (2.0 * math.pi)


def b1g_shear(eval_r: Vector2D, bob: Vector2D) -> float:
    r"""
    B1g shear from an edge dislocation at the origin.

    Parameters
    ----------
    eval_r : Vector2D
        Displacement from the dislocation core to the evaluation point.
    bob : Vector2D
        Burgers vector.

    Returns
    -------
    shear : float
        :math:`(b \cdot r)(r_x^2 - r_y^2) / (2\pi |r|^4)`

    Examples
    --------
    >>> b1g_shear(Vector2D(1., 1.), Vector2D(1., 0.))
    0.0
    >>> round(b1g_shear(Vector2D(2., 1.), Vector2D(1., 0.)), 6)  # 3 / (25 pi)
    0.038197
    """
    r2 = eval_r.magnitude2()
    return _INV_2PI * ((eval_r.x * eval_r.x - eval_r.y * eval_r.y) / r2) * bob.dot(eval_r) / r2


def b2g_shear(eval_r: Vector2D, bob: Vector2D) -> float:
    r"""
    B2g shear from an edge dislocation at the origin.

    Parameters
    ----------
    eval_r : Vector2D
        Displacement from the dislocation core to the evaluation point.
    bob : Vector2D
        Burgers vector.

    Returns
    -------
    shear : float
        :math:`-(b \cdot r)\, 2 r_x r_y / (2\pi |r|^4)`

    Examples
    --------
    >>> b2g_shear(Vector2D(1., 1.), Vector2D(1., 0.))  # -1 / (4 pi)
    -0.07957747154594767
    """
    r2 = eval_r.magnitude2()
    return -_INV_2PI * (2.0 * eval_r.x * eval_r.y / r2) * bob.dot(eval_r) / r2


def b1g_shear_field(position: Vector2D, dislocation: AbstractDislocation) -> float:
    """B1g shear at ``position`` from ``dislocation`` (plain difference)."""
    return b1g_shear(position - dislocation.origin, dislocation.burgers_vector)


def b2g_shear_field(position: Vector2D, dislocation: AbstractDislocation) -> float:
    """B2g shear at ``position`` from ``dislocation`` (plain difference)."""
    return b2g_shear(position - dislocation.origin, dislocation.burgers_vector)


def b1g_kernel(rx: ArrayLike, ry: ArrayLike, bx: float, by: float) -> ArrayLike:
    """Vectorized ``b1g_shear`` on displacement components ``rx``, ``ry``."""
    r2 = rx * rx + ry * ry
    return _INV_2PI * (rx * rx - ry * ry) * (bx * rx + by * ry) / (r2 * r2)


def b2g_kernel(rx: ArrayLike, ry: ArrayLike, bx: float, by: float) -> ArrayLike:
    """Vectorized ``b2g_shear`` on displacement components ``rx``, ``ry``."""
    r2 = rx * rx + ry * ry
    return -_INV_2PI * (2.0 * rx * ry) * (bx * rx + by * ry) / (r2 * r2)


def bxg_shears(position: Vector2D,
               dislocation: AbstractDislocation,
               boundary: BoundaryCondition = BoundaryCondition.FREE,
               Lx: Optional[float] = None,
               Ly: Optional[float] = None) -> Tuple[float, float]:
    """
    Both shears ``(b1g, b2g)`` at ``position`` from a single dislocation.

    Parameters
    ----------
    position : Vector2D
        Evaluation point.
    dislocation : AbstractDislocation
        Source dislocation.
    boundary : BoundaryCondition
        ``MINIMUM_IMAGE`` folds the displacement into the ``Lx`` x ``Ly``
        cell before evaluating; ``FREE`` and ``PERIODIC`` use the plain
        difference (no image sum is performed here).
    Lx, Ly : float, optional
        Cell size, required for ``MINIMUM_IMAGE``.

    Examples
    --------
    >>> dis = Dislocation2D(Vector2D(1., 0.), Vector2D(0., 0.))
    >>> bxg_shears(Vector2D(1., 1.), dis)
    (0.0, -0.07957747154594767)
    """
    disp = displacement(position, dislocation.origin, boundary, Lx, Ly)
    bob = dislocation.burgers_vector
    return b1g_shear(disp, bob), b2g_shear(disp, bob)


def delta_splitting(eps1: ArrayLike, eps2: ArrayLike,
                    coupling_ratio: float = 1.0) -> ArrayLike:
    """
    Level splitting as the quadrature sum of the two shear channels.

    ``sqrt(eps1**2 + (coupling_ratio * eps2)**2)``, evaluated with
    ``np.hypot``. Always non-negative and even in each strain.

    Parameters
    ----------
    eps1, eps2 : float or np.ndarray
        B1g and B2g strains (broadcast together).
    coupling_ratio : float
        Relative coupling strength of the B2g channel.

    Returns
    -------
    delta : float or np.ndarray
        A float for scalar inputs.
    """
    delta = np.hypot(eps1, coupling_ratio * np.asarray(eps2))
    if np.ndim(delta) == 0:
        return float(delta)
    return delta


class ShearChannel(NamedTuple):
    """A shear channel in its scalar-field and array-kernel forms."""
    name: str
    field: Callable[[Vector2D, AbstractDislocation], float]
    kernel: Callable[..., ArrayLike]


B1G = ShearChannel('B1g', b1g_shear_field, b1g_kernel)
B2G = ShearChannel('B2g', b2g_shear_field, b2g_kernel)

SHEAR_CHANNELS: Tuple[ShearChannel, ShearChannel] = (B1G, B2G)
