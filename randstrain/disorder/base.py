"""
Abstract base class for disorder configurations.

A disorder configuration turns a fixed set of defects into a field of local
perturbations on the lattice sites. It knows its own geometry but nothing
about how the defects were drawn; sampling lives in ``randstrain.sampling``.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Tuple


class DisorderConfiguration(ABC):
    """
    Abstract base class for a configuration of disorder on a 2D lattice.

    The generated field has shape ``(Lx, Ly, n_channels)``: index
    ``[x - 1, y - 1, c]`` holds channel ``c`` at lattice site ``(x, y)`` with
    ``x`` in ``1..Lx`` and ``y`` in ``1..Ly``.
    """

    @abstractmethod
    def system_size(self) -> Tuple[int, int]:
        """
        Get the lattice dimensions.

        Returns
        -------
        size : Tuple[int, int]
            ``(Lx, Ly)``
        """
        pass

    @property
    @abstractmethod
    def n_channels(self) -> int:
        """Number of disorder channels per site."""
        pass

    @abstractmethod
    def generate_disorder_into(self, field: np.ndarray) -> np.ndarray:
        """
        Fill ``field`` in place with this configuration's disorder.

        Parameters
        ----------
        field : np.ndarray, shape (Lx, Ly, n_channels)
            Preallocated output, e.g. one trial's slice of a survey array.
            Its previous contents are overwritten.

        Returns
        -------
        field : np.ndarray
            The same array, for chaining.
        """
        pass

    def field_shape(self) -> Tuple[int, int, int]:
        """Shape of the array returned by ``generate_disorder``."""
        Lx, Ly = self.system_size()
        return (Lx, Ly, self.n_channels)

    def generate_disorder(self) -> np.ndarray:
        """Allocate a new field and fill it with ``generate_disorder_into``."""
        field = np.zeros(self.field_shape(), dtype=float)
        return self.generate_disorder_into(field)

    def _check_field(self, field: np.ndarray) -> None:
        expected = self.field_shape()
        if not isinstance(field, np.ndarray):
            raise TypeError("field must be a numpy array")
        if field.shape != expected:
            raise ValueError(f"field has shape {field.shape}, expected {expected}")

    def __repr__(self) -> str:
        Lx, Ly = self.system_size()
        return f"{self.__class__.__name__}(Lx={Lx}, Ly={Ly}, n_channels={self.n_channels})"
