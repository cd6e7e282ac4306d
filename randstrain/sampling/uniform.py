"""
Uniformly distributed dislocations.

Cores sit at plaquette centres ``(i + 1/2, j + 1/2)`` chosen uniformly, so
they never coincide with a lattice site; Burgers vectors are drawn uniformly
from a finite set. Configurations are made charge neutral by pairing every
dislocation with one of opposite Burgers vector.
"""

import logging
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np

from ..core.vectors import Vector2D
from ..core.defects import (
    AbstractDislocation,
    Dislocation2D,
    TETRAGONAL_BURGERS_VECTORS,
)
from ..fields.pbc import check_cell_size
from .base import RandomDislocation, RandomStrainDistribution

logger = logging.getLogger(__name__)


class UniformBurgersVector(RandomDislocation):
    """
    Uniform Burgers vectors at uniform plaquette centres.

    Parameters
    ----------
    Lx : int
        Lattice size along x.
    Ly : int, optional
        Lattice size along y (default: ``Lx``).
    burgers_vectors : Sequence[Vector2D], optional
        Allowed Burgers vectors (default: ``TETRAGONAL_BURGERS_VECTORS``).

    Examples
    --------
    >>> rbv = UniformBurgersVector(16)
    >>> dis = rbv.rand_dislocation(np.random.default_rng(0))
    >>> dis.burgers_vector in TETRAGONAL_BURGERS_VECTORS
    True

    Notes
    -----
    Origins are ``0.5 + U{1..Lx}`` and ``0.5 + U{1..Ly}``, i.e. they lie in
    ``[1.5, L + 0.5]``, between the sites ``1..L`` and their next periodic
    image.
    """

    def __init__(self, Lx: int, Ly: Optional[int] = None,
                 burgers_vectors: Sequence[Vector2D] = TETRAGONAL_BURGERS_VECTORS):
        if Ly is None:
            Ly = Lx
        check_cell_size(Lx, Ly)

        burgers_vectors = tuple(burgers_vectors)
        if not burgers_vectors:
            raise ValueError("At least one Burgers vector is required")
        for bob in burgers_vectors:
            if not isinstance(bob, Vector2D):
                raise TypeError("Burgers vectors must be Vector2D instances")

        self.Lx = int(Lx)
        self.Ly = int(Ly)
        self.burgers_vectors: Tuple[Vector2D, ...] = burgers_vectors

    def system_size(self) -> Tuple[int, int]:
        return (self.Lx, self.Ly)

    def rand_burgers_vector(self, rng: np.random.Generator) -> Vector2D:
        return self.burgers_vectors[rng.integers(len(self.burgers_vectors))]

    def rand_dislocation_source(self, rng: np.random.Generator) -> Vector2D:
        x = 0.5 + int(rng.integers(1, self.Lx + 1))
        y = 0.5 + int(rng.integers(1, self.Ly + 1))
        return Vector2D(x, y)

    def __repr__(self) -> str:
        return (f"UniformBurgersVector(Lx={self.Lx}, Ly={self.Ly}, "
                f"n_burgers_vectors={len(self.burgers_vectors)})")


def _unique_source(rng: np.random.Generator, rbv: RandomDislocation,
                   taken: Set[Vector2D]) -> Vector2D:
    while True:
        origin = rbv.rand_dislocation_source(rng)
        if origin not in taken:
            taken.add(origin)
            return origin


def collect_dislocations(rng: np.random.Generator,
                         rbv: RandomDislocation,
                         num_dislocations: int) -> List[AbstractDislocation]:
    """
    Draw a charge-neutral set of dislocations with distinct origins.

    The first ``num_dislocations // 2`` dislocations take random Burgers
    vectors; the second half repeat them with opposite sign. Every
    dislocation gets its own origin.

    Parameters
    ----------
    rng : np.random.Generator
        Random number source.
    rbv : RandomDislocation
        Single-dislocation distribution.
    num_dislocations : int
        Total number of dislocations; must be even.

    Returns
    -------
    dislocations : List[AbstractDislocation]
        The sum of all Burgers vectors is exactly zero.

    Raises
    ------
    ValueError
        If ``num_dislocations`` is negative or odd, or exceeds the number of
        available origins.
    """
    if num_dislocations < 0:
        raise ValueError(f"num_dislocations must be non-negative, got {num_dislocations}")
    if num_dislocations % 2:
        raise ValueError(f"A charge-neutral set needs an even number of dislocations, "
                         f"got {num_dislocations}")
    if num_dislocations > rbv.n_sources:
        raise ValueError(f"Cannot place {num_dislocations} dislocations at distinct "
                         f"origins on {rbv.n_sources} plaquettes")

    half = num_dislocations // 2
    taken: Set[Vector2D] = set()
    dislocations: List[AbstractDislocation] = []

    for _ in range(half):
        bob = rbv.rand_burgers_vector(rng)
        dislocations.append(Dislocation2D(bob, _unique_source(rng, rbv, taken)))

    for partner in dislocations[:half]:
        dislocations.append(Dislocation2D(-partner.burgers_vector,
                                          _unique_source(rng, rbv, taken)))

    return dislocations


class RandomDislocationDistribution(RandomStrainDistribution):
    """
    Fixed number of uniformly placed, charge-neutral dislocations.

    Parameters
    ----------
    Lx : int
        Lattice size along x.
    Ly : int, optional
        Lattice size along y (default: ``Lx``).
    ndislocations : int, optional
        Dislocations per configuration (default: 2).
    burgers_vectors : Sequence[Vector2D], optional
        Allowed Burgers vectors (default: tetragonal set).
    """

    def __init__(self, Lx: int, Ly: Optional[int] = None, ndislocations: int = 2,
                 burgers_vectors: Sequence[Vector2D] = TETRAGONAL_BURGERS_VECTORS):
        self.rbv = UniformBurgersVector(Lx, Ly, burgers_vectors)
        if ndislocations < 0 or ndislocations % 2:
            raise ValueError(f"ndislocations must be a non-negative even number, "
                             f"got {ndislocations}")
        if ndislocations > self.rbv.n_sources:
            raise ValueError(f"ndislocations={ndislocations} exceeds the "
                             f"{self.rbv.n_sources} available plaquettes")
        self.ndislocations = int(ndislocations)

    def system_size(self) -> Tuple[int, int]:
        return self.rbv.system_size()

    @property
    def concentration(self) -> float:
        """Dislocations per lattice site."""
        Lx, Ly = self.system_size()
        return self.ndislocations / (Lx * Ly)

    def collect_dislocations(self, rng: np.random.Generator) -> List[AbstractDislocation]:
        dislocations = collect_dislocations(rng, self.rbv, self.ndislocations)
        Lx, Ly = self.system_size()
        logger.debug(f"Drew {len(dislocations)} dislocation(s) on {Lx}x{Ly}")
        return dislocations

    def __repr__(self) -> str:
        Lx, Ly = self.system_size()
        return (f"RandomDislocationDistribution(Lx={Lx}, Ly={Ly}, "
                f"ndislocations={self.ndislocations})")
