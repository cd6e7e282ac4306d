"""
Plots of strain fields and strain distributions.
"""

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.axes_grid1 import make_axes_locatable
from typing import Any, Dict, Optional, Sequence

from ..analysis.statistics import DEFAULT_HISTOGRAM_BINS, histogram_fit, bin_centers

# Default plot configuration
DEFAULT_PLOT_CONFIG = {
    'panel_size': (4.5, 4),
    'title_fontsize': 14,
    'xlabel': '$x$',
    'ylabel': '$y$',
    'label_fontsize': 12,
    'cmap': 'RdBu_r',
    'splitting_cmap': 'viridis',
    'colorbar_fontsize': 12,
    'symmetric': True,
    'hist_color': 'tab:blue',
    'hist_linewidth': 1.5,
    'logy': False,
    'dpi': 100,
}

DEFAULT_CHANNEL_NAMES = ('$B_{1g}$', '$B_{2g}$', r'$\Delta$')


def _config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    cfg = DEFAULT_PLOT_CONFIG.copy()
    if config:
        cfg.update(config)
    return cfg


def _add_colorbar(ax: plt.Axes, mappable: Any, label: str, fontsize: int) -> None:
    """Adds a colorbar to the right of ``ax``."""
    divider = make_axes_locatable(ax)
    cax = divider.append_axes("right", size="5%", pad=0.05)
    cbar = plt.colorbar(mappable, cax=cax)
    cbar.set_label(label, fontsize=fontsize)


def _channel_names(n_channels: int, names: Optional[Sequence[str]]) -> Sequence[str]:
    names = DEFAULT_CHANNEL_NAMES[:n_channels] if names is None else names
    if len(names) != n_channels:
        raise ValueError(f"Got {len(names)} names for {n_channels} channels")
    return names


def plot_strain_fields(strain_field: np.ndarray,
                       names: Optional[Sequence[str]] = None,
                       dislocations: Optional[Sequence] = None,
                       config: Optional[Dict[str, Any]] = None) -> plt.Figure:
    """
    One colour map per strain channel.

    Parameters
    ----------
    strain_field : np.ndarray, shape (Lx, Ly, n_channels)
        Output of ``generate_disorder`` (or one trial of a survey).
    names : Sequence[str], optional
        Panel titles (default: B1g, B2g, Delta).
    dislocations : Sequence[AbstractDislocation], optional
        Cores to mark on every panel.
    config : dict, optional
        Overrides for ``DEFAULT_PLOT_CONFIG``.

    Returns
    -------
    fig : plt.Figure
    """
    strain_field = np.asarray(strain_field, dtype=float)
    if strain_field.ndim != 3:
        raise ValueError(f"Expected a field of shape (Lx, Ly, n_channels), got {strain_field.shape}")
    cfg = _config(config)

    Lx, Ly, n_channels = strain_field.shape
    names = _channel_names(n_channels, names)
    width, height = cfg['panel_size']

    fig, axes = plt.subplots(1, n_channels, figsize=(width * n_channels, height),
                             dpi=cfg['dpi'], squeeze=False)
    extent = (0.5, Lx + 0.5, 0.5, Ly + 0.5)

    for channel, ax in enumerate(axes[0]):
        data = strain_field[:, :, channel]
        # The splitting is non-negative; shears are centred on zero
        if channel == 2:
            cmap, vmin, vmax = cfg['splitting_cmap'], 0.0, None
        elif cfg['symmetric']:
            vmax = float(np.max(np.abs(data))) or 1.0
            cmap, vmin = cfg['cmap'], -vmax
        else:
            cmap, vmin, vmax = cfg['cmap'], None, None

        # Index [x - 1, y - 1] is site (x, y): transpose so x runs horizontally
        image = ax.imshow(data.T, origin='lower', extent=extent, cmap=cmap,
                          vmin=vmin, vmax=vmax, interpolation='nearest')
        _add_colorbar(ax, image, names[channel], cfg['colorbar_fontsize'])

        if dislocations:
            xs = [dis.origin.x for dis in dislocations]
            ys = [dis.origin.y for dis in dislocations]
            ax.scatter(xs, ys, marker='x', c='k', s=30, zorder=5)

        ax.set_title(names[channel], fontsize=cfg['title_fontsize'])
        ax.set_xlabel(cfg['xlabel'], fontsize=cfg['label_fontsize'])
        ax.set_ylabel(cfg['ylabel'], fontsize=cfg['label_fontsize'])
        ax.set_aspect('equal')

    fig.tight_layout()
    return fig


def plot_strain_histograms(strains: np.ndarray,
                           nbins: int = DEFAULT_HISTOGRAM_BINS,
                           names: Optional[Sequence[str]] = None,
                           config: Optional[Dict[str, Any]] = None) -> plt.Figure:
    """
    Normalized histograms of every strain channel over sites and trials.

    Parameters
    ----------
    strains : np.ndarray, shape (Lx, Ly, n_channels[, nsamples])
        A single field or a whole survey.
    nbins : int, optional
        Number of histogram bins.
    names : Sequence[str], optional
        Panel titles.
    config : dict, optional
        Overrides for ``DEFAULT_PLOT_CONFIG``.
    """
    strains = np.asarray(strains, dtype=float)
    if strains.ndim == 3:
        strains = strains[..., np.newaxis]
    if strains.ndim != 4:
        raise ValueError(f"Expected strains of shape (Lx, Ly, n_channels[, nsamples]), "
                         f"got {strains.shape}")
    cfg = _config(config)

    n_channels = strains.shape[2]
    names = _channel_names(n_channels, names)
    width, height = cfg['panel_size']

    fig, axes = plt.subplots(1, n_channels, figsize=(width * n_channels, height),
                             dpi=cfg['dpi'], squeeze=False)

    for channel, ax in enumerate(axes[0]):
        hist = histogram_fit(strains[:, :, channel, :], nbins, normalize=True, density=True)
        ax.step(bin_centers(hist), hist.weights, where='mid',
                color=cfg['hist_color'], linewidth=cfg['hist_linewidth'])
        if cfg['logy']:
            ax.set_yscale('log')
        ax.set_title(names[channel], fontsize=cfg['title_fontsize'])
        ax.set_xlabel('Strain', fontsize=cfg['label_fontsize'])
        ax.set_ylabel('Probability density', fontsize=cfg['label_fontsize'])

    fig.tight_layout()
    return fig
