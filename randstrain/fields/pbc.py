"""
Periodic image summation of long-range fields.

A field sourced by a dislocation in an ``Lx`` x ``Ly`` cell with periodic
boundary conditions is the sum of the field of the dislocation and of all of
its periodic images. For 1/r-type fields that sum is only conditionally
convergent, so the order of summation matters: images are added in
concentric square rings around the home cell,

    ring k = cells (nx, ny) with max(|nx|, |ny|) = k     (8k cells, k >= 1)

and the summation stops once a whole ring changes the running total by less
than ``tolerance`` relative to it. An optional ``scale`` stands in for the
running total when the total is smaller, which bounds the rings spent near a
zero of the summed field (see ``field_scale``).

Two front-ends share the same ring walk and stopping rule:

- ``pbc_field``: one query position, any scalar field function
  ``phi(position, dislocation)``.
- ``pbc_field_grid``: many query positions at once with a numpy kernel
  ``kernel(rx, ry, bx, by)``; each position stops independently.

Notes
-----
The ring walk starts at the top-left corner and runs down the left edge,
right along the bottom edge, up the right edge and back left along the top
edge, visiting every cell of the ring exactly once.

Unlike a bare ``while`` loop, the summation is capped at ``max_rings``
rings; a field that does not decay fast enough raises ``ConvergenceError``
instead of looping forever.
"""

import logging
import math
import numbers
import sys
from functools import lru_cache
from typing import Callable, Iterator, Tuple

import numpy as np

from ..core.vectors import Vector2D
from ..core.defects import AbstractDislocation

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = math.sqrt(sys.float_info.epsilon)
DEFAULT_MAX_RINGS = 1000
DEFAULT_CHUNK_SIZE = 256

FieldFunction = Callable[[Vector2D, AbstractDislocation], float]


class ConvergenceError(RuntimeError):
    """
    The periodic image sum did not converge within the ring cap.

    Attributes
    ----------
    rings : int
        Number of rings summed before giving up.
    value : float
        Running total when the summation stopped (for grids: the total at
        the worst position).
    ratio : float
        Last ``|ring subtotal| / |running total|``.
    """

    def __init__(self, message: str, rings: int, value: float, ratio: float):
        super().__init__(message)
        self.rings = rings
        self.value = value
        self.ratio = ratio


def check_cell_size(Lx, Ly) -> None:
    """
    Validate periodic cell dimensions.

    Raises
    ------
    TypeError
        If either dimension is not an integer.
    ValueError
        If either dimension is not positive.
    """
    for name, size in (('Lx', Lx), ('Ly', Ly)):
        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            raise TypeError(f"{name} must be an integer, got {size!r}")
        if size <= 0:
            raise ValueError(f"Cell dimensions must be positive, got {name}={size}")


def _check_convergence_settings(tolerance: float, max_rings: int, atol: float,
                                scale: float = 0.0) -> None:
    if not tolerance > 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    if max_rings < 1:
        raise ValueError(f"max_rings must be at least 1, got {max_rings}")
    if atol < 0:
        raise ValueError(f"atol must be non-negative, got {atol}")
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")


def image_ring(ring_index: int) -> Iterator[Tuple[int, int]]:
    """
    Cells ``(nx, ny)`` of one square ring of periodic images, in walk order.

    Parameters
    ----------
    ring_index : int
        Chebyshev distance ``k`` of the ring from the home cell. Ring 0 is
        the home cell alone.

    Yields
    ------
    cell : Tuple[int, int]
        ``(nx, ny)`` image cell indices, ``8k`` of them for ``k >= 1``.

    Examples
    --------
    >>> list(image_ring(1))
    [(-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1)]
    """
    k = int(ring_index)
    if k < 0:
        raise ValueError(f"ring_index must be non-negative, got {ring_index}")
    if k == 0:
        yield (0, 0)
        return

    # Left edge, top to bottom (both left corners)
    for ny in range(k, -k - 1, -1):
        yield (-k, ny)
    # Bottom edge, left to right (bottom-right corner)
    for nx in range(-k + 1, k + 1):
        yield (nx, -k)
    # Right edge, bottom to top (top-right corner)
    for ny in range(-k + 1, k + 1):
        yield (k, ny)
    # Top edge, right to left (no corners)
    for nx in range(k - 1, -k, -1):
        yield (nx, k)


@lru_cache(maxsize=2048)
def ring_shifts(ring_index: int, Lx: int, Ly: int) -> np.ndarray:
    """
    Real-space shifts ``(nx * Lx, ny * Ly)`` of one ring, in walk order.

    Returns
    -------
    shifts : np.ndarray, shape (8k, 2)
        Read-only array. Built once per ``(ring_index, Lx, Ly)`` and shared
        by every later call.
    """
    cells = np.array(list(image_ring(ring_index)), dtype=float).reshape(-1, 2)
    shifts = cells * np.array([Lx, Ly], dtype=float)
    shifts.setflags(write=False)
    return shifts


def field_scale(dislocation: AbstractDislocation, Lx: int, Ly: int) -> float:
    """
    Typical shear magnitude of one dislocation across an ``Lx`` x ``Ly`` cell.

    ``|b| / (2 pi sqrt(Lx Ly))``, the size of the 1/r field one cell length
    away from the core. Used as the ``scale`` of periodic sums so that sites
    near a zero of the summed field converge in a bounded number of rings.
    """
    return dislocation.burgers_vector.magnitude() / (2.0 * math.pi * math.sqrt(Lx * Ly))


def _ring_converged(ring_total: float, total: float, tolerance: float, atol: float,
                    scale: float = 0.0) -> bool:
    abs_ring = abs(ring_total)
    # A non-finite total (evaluation on a core) is returned as is
    return (abs_ring <= atol
            or abs_ring < tolerance * max(abs(total), scale)
            or not math.isfinite(total))


def _cycle_ring(phi: FieldFunction, ring_index: int, position: Vector2D,
                dislocation: AbstractDislocation, Lx: int, Ly: int) -> float:
    ring_total = 0.0
    for nx, ny in image_ring(ring_index):
        ring_total += phi(position, dislocation.shift(Vector2D(nx * Lx, ny * Ly)))
    return ring_total


def pbc_field(phi: FieldFunction,
              position: Vector2D,
              dislocation: AbstractDislocation,
              Lx: int,
              Ly: int,
              tolerance: float = DEFAULT_TOLERANCE,
              max_rings: int = DEFAULT_MAX_RINGS,
              atol: float = 0.0,
              scale: float = 0.0) -> Tuple[float, int]:
    """
    Evaluate ``phi`` on an ``Lx`` x ``Ly`` periodic lattice.

    Parameters
    ----------
    phi : Callable[[Vector2D, AbstractDislocation], float]
        Field of a single dislocation, e.g. ``b1g_shear_field``.
    position : Vector2D
        Query point.
    dislocation : AbstractDislocation
        Dislocation in its home cell.
    Lx, Ly : int
        Periodic cell dimensions.
    tolerance : float, optional
        Relative stopping tolerance (default: sqrt of machine epsilon).
    max_rings : int, optional
        Maximum number of rings to sum (default: ``DEFAULT_MAX_RINGS``).
    atol : float, optional
        Absolute floor: a ring subtotal with ``|ring| <= atol`` also ends
        the summation. The default 0.0 only catches rings that cancel
        exactly (fields vanishing identically by symmetry).
    scale : float, optional
        Field magnitude below which the relative test is measured against
        ``scale`` instead of the running total: a ring with
        ``|ring| < tolerance * max(|total|, scale)`` ends the summation.
        Bounds the rings spent near a zero of the summed field, e.g.
        ``field_scale(dislocation, Lx, Ly)``. The default 0.0 keeps the
        purely relative test.

    Returns
    -------
    value : float
        Field summed over the dislocation and its periodic images.
    rings : int
        Number of rings consumed.

    Raises
    ------
    TypeError, ValueError
        For invalid cell sizes or convergence settings.
    ConvergenceError
        If ``max_rings`` rings did not meet the tolerance.

    Notes
    -----
    The home cell evaluation is always performed and is not subject to the
    convergence test; ring 1 is always summed. If ``phi`` does not decay
    the summation runs until ``max_rings``.

    Examples
    --------
    >>> dis = Dislocation2D(Vector2D(1., 0.), Vector2D(4.5, 4.5))
    >>> value, rings = pbc_field(b2g_shear_field, Vector2D(3., 6.), dis, 8, 8,
    ...                          tolerance=1e-6)
    """
    check_cell_size(Lx, Ly)
    _check_convergence_settings(tolerance, max_rings, atol, scale)

    total = phi(position, dislocation)

    ring_total = 0.0
    for ring_index in range(1, max_rings + 1):
        ring_total = _cycle_ring(phi, ring_index, position, dislocation, Lx, Ly)
        total += ring_total
        if _ring_converged(ring_total, total, tolerance, atol, scale):
            return total, ring_index

    ratio = abs(ring_total) / abs(total) if total != 0 else math.inf
    logger.warning(f"Periodic image sum at {position} for {dislocation!r} not converged "
                   f"after {max_rings} rings (ratio {ratio:.3e}, tolerance {tolerance:.3e})")
    raise ConvergenceError(
        f"Periodic image sum did not converge within {max_rings} rings "
        f"(last ratio {ratio:.3e}, tolerance {tolerance:.3e})",
        rings=max_rings, value=total, ratio=ratio)


def pbc_field_value(phi: FieldFunction,
                    position: Vector2D,
                    dislocation: AbstractDislocation,
                    Lx: int,
                    Ly: int,
                    tolerance: float = DEFAULT_TOLERANCE,
                    **kwargs) -> float:
    """Same as ``pbc_field`` but returns only the converged value."""
    return pbc_field(phi, position, dislocation, Lx, Ly, tolerance, **kwargs)[0]


def _pbc_field_chunk(kernel, x: np.ndarray, y: np.ndarray,
                     dislocation: AbstractDislocation, Lx: int, Ly: int,
                     tolerance: float, max_rings: int,
                     atol: float, scale: float) -> Tuple[np.ndarray, np.ndarray]:
    bob = dislocation.burgers_vector
    origin = dislocation.origin
    bx, by = bob.x, bob.y

    # Displacements from the home-cell dislocation
    rx0 = x - origin.x
    ry0 = y - origin.y

    total = np.array(kernel(rx0, ry0, bx, by), dtype=float).reshape(x.shape)
    rings = np.zeros(x.shape, dtype=int)
    active = np.ones(x.shape, dtype=bool)

    ring_index = 0
    ring_total = np.zeros(0)
    while active.any():
        if ring_index == max_rings:
            idx = np.flatnonzero(active)
            with np.errstate(divide='ignore', invalid='ignore'):
                ratios = np.abs(ring_total) / np.abs(total[idx])
            worst = int(np.nanargmax(ratios)) if np.any(np.isfinite(ratios)) else 0
            logger.warning(f"Periodic image sum not converged after {max_rings} rings at "
                           f"{idx.size} of {x.size} positions for {dislocation!r}")
            raise ConvergenceError(
                f"Periodic image sum did not converge within {max_rings} rings "
                f"at {idx.size} position(s) (worst ratio {ratios[worst]:.3e}, "
                f"tolerance {tolerance:.3e})",
                rings=max_rings, value=float(total[idx[worst]]),
                ratio=float(ratios[worst]))

        ring_index += 1
        idx = np.flatnonzero(active)
        shifts = ring_shifts(ring_index, Lx, Ly)

        rx = rx0[idx, np.newaxis] - shifts[np.newaxis, :, 0]
        ry = ry0[idx, np.newaxis] - shifts[np.newaxis, :, 1]
        ring_total = kernel(rx, ry, bx, by).sum(axis=1)

        new_total = total[idx] + ring_total
        total[idx] = new_total
        rings[idx] = ring_index

        abs_ring = np.abs(ring_total)
        converged = ((abs_ring <= atol)
                     | (abs_ring < tolerance * np.maximum(np.abs(new_total), scale))
                     | ~np.isfinite(new_total))
        active[idx[converged]] = False
        ring_total = ring_total[~converged]

    return total, rings


def pbc_field_grid(kernel: Callable[..., np.ndarray],
                   xs,
                   ys,
                   dislocation: AbstractDislocation,
                   Lx: int,
                   Ly: int,
                   tolerance: float = DEFAULT_TOLERANCE,
                   max_rings: int = DEFAULT_MAX_RINGS,
                   atol: float = 0.0,
                   scale: float = 0.0,
                   chunk_size: int = DEFAULT_CHUNK_SIZE) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized ``pbc_field`` over many query positions.

    Parameters
    ----------
    kernel : Callable
        ``kernel(rx, ry, bx, by)`` evaluating the single-dislocation field on
        arrays of displacements, e.g. ``b1g_kernel``.
    xs, ys : array_like
        Query coordinates (broadcast together).
    dislocation : AbstractDislocation
        Dislocation in its home cell.
    Lx, Ly : int
        Periodic cell dimensions.
    tolerance, max_rings, atol, scale : optional
        As in ``pbc_field``, applied to every position independently.
    chunk_size : int, optional
        Number of positions processed together. Bounds the size of the
        temporary ``(chunk_size, 8k)`` arrays.

    Returns
    -------
    values : np.ndarray
        Converged sums, same shape as the broadcast positions.
    rings : np.ndarray of int
        Rings consumed at each position.

    Raises
    ------
    ConvergenceError
        If any position fails to converge within ``max_rings`` rings.
    """
    check_cell_size(Lx, Ly)
    _check_convergence_settings(tolerance, max_rings, atol, scale)
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    xs, ys = np.broadcast_arrays(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float))
    shape = xs.shape
    flat_x = xs.ravel()
    flat_y = ys.ravel()

    values = np.empty(flat_x.size, dtype=float)
    rings = np.empty(flat_x.size, dtype=int)

    for start in range(0, flat_x.size, chunk_size):
        stop = min(start + chunk_size, flat_x.size)
        values[start:stop], rings[start:stop] = _pbc_field_chunk(
            kernel, flat_x[start:stop], flat_y[start:stop], dislocation,
            int(Lx), int(Ly), tolerance, max_rings, atol, scale)

    max_used = int(rings.max()) if rings.size else 0
    logger.debug(f"Periodic image sum for {dislocation!r}: {flat_x.size} position(s), "
                 f"up to {max_used} rings")

    return values.reshape(shape), rings.reshape(shape)
