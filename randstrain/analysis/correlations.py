"""
Spatial correlation functions of strain fields, computed with FFTs.

For a mean-subtracted field ``a`` on a periodic ``Lx`` x ``Ly`` lattice:

- Fourier-space correlation: ``|A(k)|^2`` with ``A = fftn(a)``
- Fourier-space cross correlation: ``conj(A1(k)) * A2(k)``
- Real-space (cross) correlation: ``(1/N) sum_x a1(x) a2(x + y)``, obtained
  by inverse transform and always centred with ``fftshift`` so zero lag
  sits at index ``(Lx // 2, Ly // 2)``.
"""

from typing import Dict, Optional, Sequence

import numpy as np
from scipy import fft


def _centered(field) -> np.ndarray:
    field = np.asarray(field, dtype=float)
    return field - field.mean()


def fourier_space_cf(field, shift: bool = True) -> np.ndarray:
    """
    Power spectrum of a field about its mean.

    Parameters
    ----------
    field : array_like
        Real field on a periodic grid.
    shift : bool, optional
        Move zero wavevector to the centre (default: True).

    Returns
    -------
    spectrum : np.ndarray
        Real, non-negative array of the same shape as ``field``.
    """
    spectrum = np.abs(fft.fftn(_centered(field))) ** 2
    return fft.fftshift(spectrum) if shift else spectrum


def fourier_space_ccf(field1, field2, shift: bool = True) -> np.ndarray:
    """Cross spectrum ``conj(F1) * F2`` of two fields about their means (complex)."""
    field1 = _centered(field1)
    field2 = _centered(field2)
    if field1.shape != field2.shape:
        raise ValueError(f"Fields differ in shape: {field1.shape} != {field2.shape}")

    spectrum = np.conj(fft.fftn(field1)) * fft.fftn(field2)
    return fft.fftshift(spectrum) if shift else spectrum


def _to_real_space(spectrum: np.ndarray, shift: bool) -> np.ndarray:
    if shift:
        spectrum = fft.ifftshift(spectrum)
    return fft.fftshift(fft.ifftn(spectrum) / spectrum.size)


def real_space_cf(field, shift: bool = True) -> np.ndarray:
    """
    Autocorrelation ``(1/N) sum_x a(x) a(x + y)`` of a field about its mean.

    Returns a complex array (imaginary part at round-off level), centred so
    that zero lag is at ``(Lx // 2, Ly // 2)``; its value there is the
    population variance of the field. ``shift`` only selects the
    intermediate Fourier-space convention and does not change the result.
    """
    return _to_real_space(fourier_space_cf(field, shift), shift)


def real_space_ccf(field1, field2, shift: bool = True) -> np.ndarray:
    """Cross correlation ``(1/N) sum_x a1(x) a2(x + y)``, centred like ``real_space_cf``."""
    return _to_real_space(fourier_space_ccf(field1, field2, shift), shift)


def average_correlations(strains: np.ndarray,
                         names: Optional[Sequence[str]] = None,
                         shift: bool = True) -> Dict[str, np.ndarray]:
    """
    Trial-averaged correlation functions of a survey.

    Parameters
    ----------
    strains : np.ndarray, shape (Lx, Ly, n_channels, nsamples)
        Survey output.
    names : Sequence[str], optional
        Channel names (default: ``('B1g', 'B2g', 'Delta')`` truncated to
        ``n_channels``).
    shift : bool, optional
        Centre the Fourier-space results.

    Returns
    -------
    correlations : Dict[str, np.ndarray]
        ``FourierSpaceCF<name>`` and ``RealSpaceCF<name>`` for every channel
        and, when at least two channels are present, the cross correlations
        ``FourierSpaceCCF<a><b>``, ``FourierSpaceCCF<b><a>``,
        ``RealSpaceCCF<a><b>`` and ``RealSpaceCCF<b><a>`` of the first two.
    """
    strains = np.asarray(strains, dtype=float)
    if strains.ndim != 4:
        raise ValueError(f"Expected strains of shape (Lx, Ly, n_channels, nsamples), "
                         f"got {strains.shape}")
    n_channels = strains.shape[2]
    nsamples = strains.shape[3]
    if names is None:
        names = ('B1g', 'B2g', 'Delta')[:n_channels]
    if len(names) != n_channels:
        raise ValueError(f"Got {len(names)} names for {n_channels} channels")

    result: Dict[str, np.ndarray] = {}
    for channel, name in enumerate(names):
        fs = np.zeros(strains.shape[:2], dtype=float)
        rs = np.zeros(strains.shape[:2], dtype=complex)
        for trial in range(nsamples):
            field = strains[:, :, channel, trial]
            fs += fourier_space_cf(field, shift)
            rs += real_space_cf(field, shift)
        result[f'FourierSpaceCF{name}'] = fs / nsamples
        result[f'RealSpaceCF{name}'] = rs / nsamples

    if n_channels >= 2:
        a, b = names[0], names[1]
        pairs = {f'{a}{b}': (0, 1), f'{b}{a}': (1, 0)}
        for label, (i, j) in pairs.items():
            fs = np.zeros(strains.shape[:2], dtype=complex)
            rs = np.zeros(strains.shape[:2], dtype=complex)
            for trial in range(nsamples):
                fs += fourier_space_ccf(strains[:, :, i, trial], strains[:, :, j, trial], shift)
                rs += real_space_ccf(strains[:, :, i, trial], strains[:, :, j, trial], shift)
            result[f'FourierSpaceCCF{label}'] = fs / nsamples
            result[f'RealSpaceCCF{label}'] = rs / nsamples

    return result
