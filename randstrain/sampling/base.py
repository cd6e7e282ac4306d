"""
Abstract base classes for random dislocation ensembles.

Two layers:
- RandomDislocation: draws a single dislocation (Burgers vector + origin)
- RandomStrainDistribution: draws a whole configuration of dislocations
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import List, Tuple

from ..core.vectors import Vector2D
from ..core.defects import AbstractDislocation, Dislocation2D


class RandomDislocation(ABC):
    """
    Abstract source of random dislocations on an ``Lx`` x ``Ly`` lattice.

    Implementations choose the distribution of Burgers vectors and of core
    positions; ``rand_dislocation`` combines the two.
    """

    @abstractmethod
    def rand_burgers_vector(self, rng: np.random.Generator) -> Vector2D:
        """
        Draw a Burgers vector.

        Parameters
        ----------
        rng : np.random.Generator
            Random number source.

        Returns
        -------
        bob : Vector2D
        """
        pass

    @abstractmethod
    def rand_dislocation_source(self, rng: np.random.Generator) -> Vector2D:
        """
        Draw a core position.

        Parameters
        ----------
        rng : np.random.Generator
            Random number source.

        Returns
        -------
        origin : Vector2D
        """
        pass

    @abstractmethod
    def system_size(self) -> Tuple[int, int]:
        """Lattice dimensions ``(Lx, Ly)``."""
        pass

    @property
    def n_sources(self) -> int:
        """Number of distinct core positions available."""
        Lx, Ly = self.system_size()
        return Lx * Ly

    def rand_dislocation(self, rng: np.random.Generator) -> AbstractDislocation:
        """Draw a Burgers vector, then an origin, and build a ``Dislocation2D``."""
        bob = self.rand_burgers_vector(rng)
        origin = self.rand_dislocation_source(rng)
        return Dislocation2D(bob, origin)


class RandomStrainDistribution(ABC):
    """
    Abstract distribution over dislocation configurations.

    A configuration is a list of dislocations which, fed into
    ``randstrain.disorder.generate_disorder``, yields one random strain
    field.
    """

    @abstractmethod
    def collect_dislocations(self, rng: np.random.Generator) -> List[AbstractDislocation]:
        """
        Draw one configuration.

        Parameters
        ----------
        rng : np.random.Generator
            Random number source.

        Returns
        -------
        dislocations : List[AbstractDislocation]
        """
        pass

    @abstractmethod
    def system_size(self) -> Tuple[int, int]:
        """Lattice dimensions ``(Lx, Ly)``."""
        pass
