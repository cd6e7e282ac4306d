"""
randstrain: Random Strain Fields from Edge Dislocations

A Python package for generating the shear strain fields of random ensembles
of edge dislocations in a periodic 2D square lattice, and for analysing the
resulting strain and level-splitting distributions.

Main Components
---------------
core : Value-typed 2D vectors, boundary conditions, dislocations
fields : B1g / B2g shear fields and periodic image summation
disorder : Assembly of strain fields on the lattice
sampling : Random charge-neutral dislocation ensembles
surveys : Monte Carlo strain surveys
analysis : Moments, histograms and spatial correlations
visualization : Plotting tools
utils : Logging setup

Quick Start
-----------
>>> import numpy as np
>>> from randstrain import (Vector2D, Dislocation2D, generate_disorder,
...                         DistributionParameters, run_survey)
>>>
>>> # A dislocation pair on a 16 x 16 periodic lattice
>>> pair = [Dislocation2D(Vector2D(1., 0.), Vector2D(4.5, 8.5)),
...         Dislocation2D(Vector2D(-1., 0.), Vector2D(12.5, 8.5))]
>>> field = generate_disorder(16, 16, pair, include_splitting=True, tolerance=1e-4)
>>> field.shape
(16, 16, 3)
>>>
>>> # An ensemble of 10 random configurations
>>> results = run_survey(DistributionParameters(Lx=32, ndislocations=4, nsamples=10))
>>> results['dataframe'].columns.tolist()
['B1g', 'B2g', 'Delta']

Current Version: 0.1.0
"""

import logging

__version__ = "0.1.0"

# High-level API exports
from .core import (
    Vector2D,
    BoundaryCondition,
    subtract_pbc,
    Dislocation2D,
    TETRAGONAL_BURGERS_VECTORS,
    DIAGONAL_BURGERS_VECTORS,
    COMBINED_BURGERS_VECTORS,
)

from .fields import (
    b1g_shear,
    b2g_shear,
    delta_splitting,
    ConvergenceError,
    pbc_field,
    pbc_field_grid,
)

from .disorder import ShearFromDislocations, generate_disorder

from .sampling import (
    UniformBurgersVector,
    RandomDislocationDistribution,
    collect_dislocations,
)

from .surveys import DistributionParameters, survey, run_survey, strains_to_dataframe

from .utils import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    '__version__',

    # Core
    'Vector2D',
    'BoundaryCondition',
    'subtract_pbc',
    'Dislocation2D',
    'TETRAGONAL_BURGERS_VECTORS',
    'DIAGONAL_BURGERS_VECTORS',
    'COMBINED_BURGERS_VECTORS',

    # Fields
    'b1g_shear',
    'b2g_shear',
    'delta_splitting',
    'ConvergenceError',
    'pbc_field',
    'pbc_field_grid',

    # Disorder and sampling
    'ShearFromDislocations',
    'generate_disorder',
    'UniformBurgersVector',
    'RandomDislocationDistribution',
    'collect_dislocations',

    # Surveys
    'DistributionParameters',
    'survey',
    'run_survey',
    'strains_to_dataframe',

    # Utilities
    'setup_logging',
]
