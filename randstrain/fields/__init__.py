"""
Strain fields of dislocations and their periodic image sums.

- shear: closed-form B1g / B2g shears of a single edge dislocation and the
  level splitting
- pbc: ring-by-ring summation over periodic images (scalar and vectorized)
"""

from .shear import (
    b1g_shear,
    b2g_shear,
    b1g_shear_field,
    b2g_shear_field,
    b1g_kernel,
    b2g_kernel,
    bxg_shears,
    delta_splitting,
    ShearChannel,
    B1G,
    B2G,
    SHEAR_CHANNELS,
)

from .pbc import (
    DEFAULT_TOLERANCE,
    DEFAULT_MAX_RINGS,
    DEFAULT_CHUNK_SIZE,
    ConvergenceError,
    check_cell_size,
    field_scale,
    image_ring,
    ring_shifts,
    pbc_field,
    pbc_field_value,
    pbc_field_grid,
)

__all__ = [
    # Shear fields
    'b1g_shear',
    'b2g_shear',
    'b1g_shear_field',
    'b2g_shear_field',
    'b1g_kernel',
    'b2g_kernel',
    'bxg_shears',
    'delta_splitting',
    'ShearChannel',
    'B1G',
    'B2G',
    'SHEAR_CHANNELS',

    # Periodic image summation
    'DEFAULT_TOLERANCE',
    'DEFAULT_MAX_RINGS',
    'DEFAULT_CHUNK_SIZE',
    'ConvergenceError',
    'check_cell_size',
    'field_scale',
    'image_ring',
    'ring_shifts',
    'pbc_field',
    'pbc_field_value',
    'pbc_field_grid',
]
