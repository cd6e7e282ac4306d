"""
Visualization of strain fields and their distributions (matplotlib).
"""

from .strain_maps import (
    DEFAULT_PLOT_CONFIG,
    plot_strain_fields,
    plot_strain_histograms,
)

__all__ = [
    'DEFAULT_PLOT_CONFIG',
    'plot_strain_fields',
    'plot_strain_histograms',
]
