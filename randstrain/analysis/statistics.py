"""
Summary statistics of strain distributions.

Moments (mean, variance, skewness, excess kurtosis), joint moments of two
strain channels (covariance, excess co-kurtosis) and equal-width histograms.
``cycle_statistics`` and ``covariable_statistics`` collect them under
names of the form ``<Statistic><Variable>``, e.g. ``VarianceB1g``.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

DEFAULT_HISTOGRAM_BINS = 64
DEFAULT_DENSE_HISTOGRAM_BINS = 8 * DEFAULT_HISTOGRAM_BINS


class Histogram(NamedTuple):
    """Bin weights and the ``len(weights) + 1`` bin edges."""
    weights: np.ndarray
    edges: np.ndarray


def _as_samples(data) -> np.ndarray:
    x = np.asarray(data, dtype=float).ravel()
    if x.size == 0:
        raise ValueError("Statistics need at least one sample")
    return x


# =============================================================================
# Moments
# =============================================================================

def mean(data) -> float:
    return float(np.mean(_as_samples(data)))


def variance(data) -> float:
    """Sample variance (``ddof=1``)."""
    return float(np.var(_as_samples(data), ddof=1))


def skewness(data) -> float:
    """Moment-based skewness (biased estimator)."""
    return float(stats.skew(_as_samples(data)))


def kurtosis(data) -> float:
    """Moment-based excess kurtosis; zero for a Gaussian."""
    return float(stats.kurtosis(_as_samples(data), fisher=True))


def _paired(x, y) -> Tuple[np.ndarray, np.ndarray]:
    x = _as_samples(x)
    y = _as_samples(y)
    if x.shape != y.shape:
        raise ValueError(f"Paired samples differ in length: {x.size} != {y.size}")
    return x, y


def covariance(x, y, mux: Optional[float] = None, muy: Optional[float] = None) -> float:
    """
    Population covariance ``<(x - mux)(y - muy)>``.

    The means default to the sample means.
    """
    x, y = _paired(x, y)
    mux = np.mean(x) if mux is None else mux
    muy = np.mean(y) if muy is None else muy
    return float(np.mean((x - mux) * (y - muy)))


def excess_cokurtosis(x, y, mux: Optional[float] = None, muy: Optional[float] = None) -> float:
    r"""
    Excess co-kurtosis of two variables.

    .. math::

        \frac{\langle \delta x^2 \delta y^2 \rangle}
             {\langle \delta x^2 \rangle \langle \delta y^2 \rangle
              + 2 \langle \delta x \, \delta y \rangle^2} - 1

    with :math:`\delta x = x - \mu_x`. Vanishes for jointly Gaussian
    variables (Isserlis' theorem).
    """
    x, y = _paired(x, y)
    dx = x - (np.mean(x) if mux is None else mux)
    dy = y - (np.mean(y) if muy is None else muy)

    numerator = np.mean(dx ** 2 * dy ** 2)
    denominator = np.mean(dx ** 2) * np.mean(dy ** 2) + 2.0 * np.mean(dx * dy) ** 2
    return float(numerator / denominator - 1.0)


# =============================================================================
# Histograms
# =============================================================================

def histogram_fit(data, nbins: int = DEFAULT_HISTOGRAM_BINS,
                  normalize: bool = False, density: bool = True) -> Histogram:
    """
    Histogram with ``nbins`` equal-width bins spanning the data range.

    Parameters
    ----------
    data : array_like
        Samples.
    nbins : int, optional
        Number of bins (default: ``DEFAULT_HISTOGRAM_BINS``).
    normalize : bool, optional
        Weight every sample by ``1 / N`` (default: raw counts).
    density : bool, optional
        Only with ``normalize``: additionally divide by the bin width so the
        histogram integrates to one. Otherwise the weights sum to one.

    Returns
    -------
    hist : Histogram
        ``weights`` of length ``nbins`` and ``edges`` of length ``nbins + 1``.
    """
    if nbins < 1:
        raise ValueError(f"nbins must be at least 1, got {nbins}")
    x = _as_samples(data)

    # np.histogram widens a zero-width range to +/- 0.5
    counts, edges = np.histogram(x, bins=nbins, range=(x.min(), x.max()))
    weights = counts.astype(float)

    if normalize:
        weights /= x.size
        if density:
            weights /= np.diff(edges)

    return Histogram(weights, edges)


def bin_centers(hist: Histogram) -> np.ndarray:
    """Midpoints of the histogram bins."""
    edges = np.asarray(hist.edges)
    return 0.5 * (edges[:-1] + edges[1:])


# =============================================================================
# Named statistics
# =============================================================================

def cycle_statistics(data, name: str,
                     nbins: int = DEFAULT_HISTOGRAM_BINS,
                     dense_nbins: int = DEFAULT_DENSE_HISTOGRAM_BINS,
                     histograms: bool = True) -> Dict[str, Any]:
    """
    Moments and histograms of one variable.

    Parameters
    ----------
    data : array_like
        Samples.
    name : str
        Variable name appended to every key, e.g. ``'B1g'``.
    nbins, dense_nbins : int, optional
        Bin counts of the regular and dense histograms.
    histograms : bool, optional
        Include the four histograms (default: True).

    Returns
    -------
    statistics : Dict[str, Any]
        ``Mean``, ``Variance``, ``Skewness``, ``Kurtosis`` and, with
        ``histograms``, ``HistogramFit``, ``DenseHistogramFit``,
        ``NormHistogramFit`` and ``DenseNormHistogramFit``, each suffixed
        with ``name``.

    Examples
    --------
    >>> sorted(cycle_statistics([1., 2., 4.], 'X', histograms=False))
    ['KurtosisX', 'MeanX', 'SkewnessX', 'VarianceX']
    """
    x = _as_samples(data)
    result: Dict[str, Any] = {
        f'Mean{name}': mean(x),
        f'Variance{name}': variance(x),
        f'Skewness{name}': skewness(x),
        f'Kurtosis{name}': kurtosis(x),
    }
    if histograms:
        result[f'HistogramFit{name}'] = histogram_fit(x, nbins)
        result[f'DenseHistogramFit{name}'] = histogram_fit(x, dense_nbins)
        result[f'NormHistogramFit{name}'] = histogram_fit(x, nbins, normalize=True, density=True)
        result[f'DenseNormHistogramFit{name}'] = histogram_fit(x, dense_nbins,
                                                               normalize=True, density=True)
    return result


def covariable_statistics(x, y, names: Sequence[str] = ('B1g', 'B2g')) -> Dict[str, float]:
    """Covariance and excess co-kurtosis, keyed e.g. ``CoVarianceB1gB2g``."""
    suffix = ''.join(names)
    return {
        f'CoVariance{suffix}': covariance(x, y),
        f'CoKurtosis{suffix}': excess_cokurtosis(x, y),
    }


def survey_statistics(df: pd.DataFrame,
                      dislocations: Optional[List[list]] = None,
                      nbins: int = DEFAULT_HISTOGRAM_BINS,
                      dense_nbins: int = DEFAULT_DENSE_HISTOGRAM_BINS,
                      histograms: bool = False) -> pd.DataFrame:
    """
    One-row summary of a survey.

    Parameters
    ----------
    df : pd.DataFrame
        Output of ``strains_to_dataframe`` (columns ``B1g``, ``B2g``,
        ``Delta``).
    dislocations : List[list], optional
        Configurations of the survey; adds statistics of the number of
        dislocations per trial.
    nbins, dense_nbins : int, optional
        Histogram bin counts.
    histograms : bool, optional
        Store histogram objects in the row as well.

    Returns
    -------
    summary : pd.DataFrame
        A single row with one column per statistic.
    """
    row: Dict[str, Any] = {}
    if dislocations is not None:
        counts = [len(config) for config in dislocations]
        row.update(cycle_statistics(counts, 'NumDislocations', nbins, dense_nbins,
                                    histograms=histograms))

    for column in df.columns:
        row.update(cycle_statistics(df[column].to_numpy(), column, nbins, dense_nbins,
                                    histograms=histograms))

    row.update(covariable_statistics(df['B1g'].to_numpy(), df['B2g'].to_numpy()))
    return pd.DataFrame([row])
