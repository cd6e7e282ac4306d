"""
Shear strain disorder generated by a set of edge dislocations.

Each lattice site receives the B1g and B2g shears summed over all
dislocations (and, for periodic cells, over all of their images). An optional
third channel holds the level splitting computed from the summed shears.
"""

import logging
import numbers
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.vectors import Vector2D, BoundaryCondition, subtract_pbc
from ..core.defects import AbstractDislocation
from ..fields.shear import ShearChannel, SHEAR_CHANNELS, delta_splitting
from ..fields.pbc import (
    DEFAULT_TOLERANCE,
    DEFAULT_MAX_RINGS,
    check_cell_size,
    field_scale,
    pbc_field,
    pbc_field_grid,
)
from .base import DisorderConfiguration

logger = logging.getLogger(__name__)

# Ring subtotals below this are treated as converged during assembly
DEFAULT_ASSEMBLY_ATOL = 1e-12

B1G_CHANNEL = 0
B2G_CHANNEL = 1
SPLITTING_CHANNEL = 2


class ShearFromDislocations(DisorderConfiguration):
    """
    B1g / B2g shear fields of a fixed list of dislocations.

    Parameters
    ----------
    Lx, Ly : int
        Lattice dimensions. Sites are ``(x, y)`` with ``x`` in ``1..Lx`` and
        ``y`` in ``1..Ly``.
    dislocations : Iterable[AbstractDislocation]
        Sources. Neutrality and origin uniqueness are not checked.
    include_splitting : bool, optional
        Add a third channel with ``delta_splitting(B1g, B2g, coupling_ratio)``.
    coupling_ratio : float, optional
        Relative coupling of the B2g channel in the splitting (default: 1.0).
    boundary : BoundaryCondition or str, optional
        ``PERIODIC`` (default) sums every periodic image, ``MINIMUM_IMAGE``
        only the nearest one, ``FREE`` only the dislocation itself.
    tolerance : float, optional
        Relative ring tolerance of the periodic sum.
    max_rings : int, optional
        Ring cap of the periodic sum.
    atol : float, optional
        Absolute ring tolerance of the periodic sum.
    scale : float, optional
        Field scale of the periodic sum (see ``pbc_field``). ``None``
        (default) uses ``field_scale`` of each dislocation, so sites near a
        zero of the field are resolved to ``tolerance * field_scale``
        instead of relative to their own tiny value. ``0.0`` restores the
        purely relative test.
    vectorized : bool, optional
        Evaluate periodic sums for all sites at once with ``pbc_field_grid``
        (default). ``False`` walks the sites one at a time with
        ``pbc_field``; both follow the same ring walk and stopping rule.

    Examples
    --------
    >>> dis = Dislocation2D(Vector2D(1., 0.), Vector2D(4.5, 4.5))
    >>> config = ShearFromDislocations(8, 8, [dis], include_splitting=True,
    ...                                tolerance=1e-4)
    >>> config.generate_disorder().shape
    (8, 8, 3)
    """

    def __init__(self,
                 Lx: int,
                 Ly: int,
                 dislocations: Iterable[AbstractDislocation],
                 include_splitting: bool = False,
                 coupling_ratio: float = 1.0,
                 boundary: Union[BoundaryCondition, str] = BoundaryCondition.PERIODIC,
                 tolerance: float = DEFAULT_TOLERANCE,
                 max_rings: int = DEFAULT_MAX_RINGS,
                 atol: float = DEFAULT_ASSEMBLY_ATOL,
                 scale: Optional[float] = None,
                 vectorized: bool = True):
        check_cell_size(Lx, Ly)

        dislocations = tuple(dislocations)
        for dis in dislocations:
            if not isinstance(dis, AbstractDislocation):
                raise TypeError(f"Expected AbstractDislocation, got {type(dis).__name__}")

        if not isinstance(coupling_ratio, numbers.Real):
            raise TypeError("coupling_ratio must be a real number")
        if not tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        if scale is not None and scale < 0:
            raise ValueError(f"scale must be non-negative, got {scale}")

        self.Lx = int(Lx)
        self.Ly = int(Ly)
        self.dislocations: Tuple[AbstractDislocation, ...] = dislocations
        self.include_splitting = bool(include_splitting)
        self.coupling_ratio = float(coupling_ratio)
        self.boundary = BoundaryCondition(boundary)
        self.tolerance = tolerance
        self.max_rings = max_rings
        self.atol = atol
        self.scale = scale
        self.vectorized = vectorized

    def system_size(self) -> Tuple[int, int]:
        return (self.Lx, self.Ly)

    @property
    def n_channels(self) -> int:
        return 3 if self.include_splitting else 2

    def site_coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Coordinates of every lattice site.

        Returns
        -------
        xs, ys : np.ndarray, shape (Lx, Ly)
            ``xs[i, j] = i + 1`` and ``ys[i, j] = j + 1``.
        """
        return np.meshgrid(np.arange(1, self.Lx + 1, dtype=float),
                           np.arange(1, self.Ly + 1, dtype=float),
                           indexing='ij')

    def image_sum_scale(self, dislocation: AbstractDislocation) -> float:
        """Field scale passed to the periodic sums of ``dislocation``."""
        if self.scale is None:
            return field_scale(dislocation, self.Lx, self.Ly)
        return self.scale

    def channel_field(self, channel: ShearChannel,
                      dislocation: AbstractDislocation) -> np.ndarray:
        """
        One shear channel of one dislocation on every site.

        Parameters
        ----------
        channel : ShearChannel
            ``B1G`` or ``B2G``.
        dislocation : AbstractDislocation
            Source dislocation.

        Returns
        -------
        values : np.ndarray, shape (Lx, Ly)
        """
        xs, ys = self.site_coordinates()
        bob = dislocation.burgers_vector
        origin = dislocation.origin

        if self.boundary is BoundaryCondition.FREE:
            return channel.kernel(xs - origin.x, ys - origin.y, bob.x, bob.y)

        if self.boundary is BoundaryCondition.MINIMUM_IMAGE:
            rx = subtract_pbc(xs, origin.x, self.Lx)
            ry = subtract_pbc(ys, origin.y, self.Ly)
            return channel.kernel(rx, ry, bob.x, bob.y)

        scale = self.image_sum_scale(dislocation)
        if self.vectorized:
            values, _ = pbc_field_grid(channel.kernel, xs, ys, dislocation,
                                       self.Lx, self.Ly,
                                       tolerance=self.tolerance,
                                       max_rings=self.max_rings,
                                       atol=self.atol,
                                       scale=scale)
            return values

        values = np.empty((self.Lx, self.Ly), dtype=float)
        for i in range(self.Lx):
            for j in range(self.Ly):
                values[i, j], _ = pbc_field(channel.field, Vector2D(i + 1, j + 1),
                                            dislocation, self.Lx, self.Ly,
                                            tolerance=self.tolerance,
                                            max_rings=self.max_rings,
                                            atol=self.atol,
                                            scale=scale)
        return values

    def generate_disorder_into(self, field: np.ndarray) -> np.ndarray:
        self._check_field(field)
        field[...] = 0.0

        logger.debug(f"Assembling {self.boundary.value} shears of {len(self.dislocations)} "
                     f"dislocation(s) on {self.Lx}x{self.Ly}")

        for dislocation in self.dislocations:
            for index, channel in enumerate(SHEAR_CHANNELS):
                field[:, :, index] += self.channel_field(channel, dislocation)

        if self.include_splitting:
            field[:, :, SPLITTING_CHANNEL] = delta_splitting(field[:, :, B1G_CHANNEL],
                                                             field[:, :, B2G_CHANNEL],
                                                             self.coupling_ratio)
        return field


def generate_disorder(Lx: int,
                      Ly: int,
                      dislocations: Sequence[AbstractDislocation],
                      include_splitting: bool = False,
                      tolerance: float = DEFAULT_TOLERANCE,
                      coupling_ratio: float = 1.0,
                      boundary: Union[BoundaryCondition, str] = BoundaryCondition.PERIODIC,
                      vectorized: bool = True,
                      max_rings: int = DEFAULT_MAX_RINGS,
                      atol: float = DEFAULT_ASSEMBLY_ATOL,
                      scale: Optional[float] = None,
                      out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Shear strain field of a set of dislocations on an ``Lx`` x ``Ly`` lattice.

    Parameters
    ----------
    Lx, Ly : int
        Lattice dimensions.
    dislocations : Sequence[AbstractDislocation]
        Sources.
    include_splitting : bool, optional
        Append the level-splitting channel.
    tolerance : float, optional
        Relative ring tolerance of the periodic sums.
    coupling_ratio : float, optional
        B2g coupling ratio used by the splitting.
    boundary : BoundaryCondition or str, optional
        Boundary policy (default: ``PERIODIC``).
    vectorized : bool, optional
        Use the vectorized periodic-sum engine.
    max_rings, atol, scale : optional
        Passed to the periodic-sum engine (see ``ShearFromDislocations``).
    out : np.ndarray, optional
        Preallocated ``(Lx, Ly, channels)`` output to fill in place.

    Returns
    -------
    field : np.ndarray, shape (Lx, Ly, 2) or (Lx, Ly, 3)
        ``field[x - 1, y - 1]`` holds ``(B1g, B2g[, Delta])`` at site ``(x, y)``.

    Raises
    ------
    ValueError
        For non-positive lattice sizes.
    ConvergenceError
        If a periodic sum exceeds the ring cap.
    """
    config = ShearFromDislocations(Lx, Ly, dislocations,
                                   include_splitting=include_splitting,
                                   coupling_ratio=coupling_ratio,
                                   boundary=boundary,
                                   tolerance=tolerance,
                                   max_rings=max_rings,
                                   atol=atol,
                                   scale=scale,
                                   vectorized=vectorized)
    if out is None:
        return config.generate_disorder()
    return config.generate_disorder_into(out)
