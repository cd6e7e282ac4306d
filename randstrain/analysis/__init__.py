"""
Statistical analysis of strain surveys.

- statistics: moments, joint moments and histograms
- correlations: FFT-based spatial correlation functions
"""

from .statistics import (
    DEFAULT_HISTOGRAM_BINS,
    DEFAULT_DENSE_HISTOGRAM_BINS,
    Histogram,
    mean,
    variance,
    skewness,
    kurtosis,
    covariance,
    excess_cokurtosis,
    histogram_fit,
    bin_centers,
    cycle_statistics,
    covariable_statistics,
    survey_statistics,
)

from .correlations import (
    fourier_space_cf,
    fourier_space_ccf,
    real_space_cf,
    real_space_ccf,
    average_correlations,
)

__all__ = [
    # Moments
    'mean',
    'variance',
    'skewness',
    'kurtosis',
    'covariance',
    'excess_cokurtosis',

    # Histograms
    'DEFAULT_HISTOGRAM_BINS',
    'DEFAULT_DENSE_HISTOGRAM_BINS',
    'Histogram',
    'histogram_fit',
    'bin_centers',

    # Named statistics
    'cycle_statistics',
    'covariable_statistics',
    'survey_statistics',

    # Correlations
    'fourier_space_cf',
    'fourier_space_ccf',
    'real_space_cf',
    'real_space_ccf',
    'average_correlations',
]
