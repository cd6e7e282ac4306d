"""
Parameters of a random strain survey.
"""

import numbers
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

DEFAULT_SURVEY_PREFIX = 'strain-survey'


@dataclass
class DistributionParameters:
    """
    Parameters of an ensemble of random dislocation configurations.

    Attributes
    ----------
    Lx : int
        Lattice size along x (default: 128).
    Ly : int, optional
        Lattice size along y (default: ``Lx``).
    ndislocations : int
        Dislocations per configuration; even (default: 2).
    cratio : float
        B2g coupling ratio of the level splitting (default: 1.0).
    rtol : float
        Relative ring tolerance of the periodic sums (default: 0.1).
    nsamples : int
        Number of independent configurations (default: 1).

    Examples
    --------
    >>> params = DistributionParameters(Lx=64, ndislocations=4)
    >>> params.Ly, params.nsize, params.concentration
    (64, 4096, 0.0009765625)
    >>> params.savename('strains')
    'strains_Lx=64_Ly=64_cratio=1_ndislocations=4_nsamples=1_rtol=0.1'
    """
    Lx: int = 128
    Ly: Optional[int] = None
    ndislocations: int = 2
    cratio: float = 1.0
    rtol: float = 0.1
    nsamples: int = 1

    def __post_init__(self):
        if self.Ly is None:
            self.Ly = self.Lx

        for name in ('Lx', 'Ly', 'ndislocations', 'nsamples'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise TypeError(f"{name} must be an integer, got {value!r}")

        if self.Lx <= 0 or self.Ly <= 0:
            raise ValueError(f"Lattice sizes must be positive, got Lx={self.Lx}, Ly={self.Ly}")
        if self.ndislocations < 0 or self.ndislocations % 2:
            raise ValueError(f"ndislocations must be a non-negative even number, "
                             f"got {self.ndislocations}")
        if self.ndislocations > self.Lx * self.Ly:
            raise ValueError(f"ndislocations={self.ndislocations} exceeds the number "
                             f"of plaquettes {self.Lx * self.Ly}")
        if not self.rtol > 0:
            raise ValueError(f"rtol must be positive, got {self.rtol}")
        if self.nsamples < 1:
            raise ValueError(f"nsamples must be at least 1, got {self.nsamples}")

        self.Lx = int(self.Lx)
        self.Ly = int(self.Ly)
        self.ndislocations = int(self.ndislocations)
        self.cratio = float(self.cratio)
        self.rtol = float(self.rtol)
        self.nsamples = int(self.nsamples)

    @property
    def nsize(self) -> int:
        """Number of lattice sites."""
        return self.Lx * self.Ly

    @property
    def concentration(self) -> float:
        """Dislocations per lattice site."""
        return self.ndislocations / self.nsize

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DistributionParameters':
        """
        Build from a dictionary, e.g. the output of ``to_dict``.

        Raises
        ------
        TypeError
            If ``data`` contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise TypeError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")
        return cls(**data)

    def savename(self, prefix: str = DEFAULT_SURVEY_PREFIX) -> str:
        """
        Stable file stem of the form ``prefix_key=value_...``.

        Keys are sorted; floats are written in ``%g`` format.
        """
        parts = []
        for key, value in sorted(self.to_dict().items()):
            if isinstance(value, float):
                value = f"{value:g}"
            parts.append(f"{key}={value}")
        body = '_'.join(parts)
        return f"{prefix}_{body}" if prefix else body

    @classmethod
    def from_savename(cls, name: str) -> 'DistributionParameters':
        """
        Inverse of ``savename``: recover the parameters from a file stem.

        Any prefix and file extension are ignored.

        Examples
        --------
        >>> params = DistributionParameters(Lx=32, nsamples=10)
        >>> DistributionParameters.from_savename(params.savename() + '.npz') == params
        True
        """
        stem = name.rsplit('/', 1)[-1]
        head, dot, ext = stem.rpartition('.')
        if dot and ext and not ext[0].isdigit():
            stem = head

        values: Dict[str, Any] = {}
        for token in stem.split('_'):
            if '=' not in token:
                continue
            key, raw = token.split('=', 1)
            if key not in _FIELD_TYPES:
                raise ValueError(f"Unknown parameter '{key}' in '{name}'")
            values[key] = _FIELD_TYPES[key](raw)

        return cls(**values)


_FIELD_TYPES = {
    'Lx': int,
    'Ly': int,
    'ndislocations': int,
    'cratio': float,
    'rtol': float,
    'nsamples': int,
}
