"""
Monte Carlo surveys of random strain fields.

A survey draws ``nsamples`` independent dislocation configurations and
assembles the B1g, B2g and splitting fields of each one into a single
``(Lx, Ly, 3, nsamples)`` array. Trials are independent: each owns a
``numpy.random.Generator`` spawned from one ``SeedSequence`` and writes only
its own slice of the output, so a threaded run reproduces the serial one.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..core.vectors import Vector2D
from ..core.defects import AbstractDislocation, TETRAGONAL_BURGERS_VECTORS
from ..disorder import generate_disorder
from ..sampling import RandomDislocationDistribution
from .parameters import DistributionParameters

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42
STRAIN_COLUMNS = ('B1g', 'B2g', 'Delta')


def spawn_generators(seed: Optional[int], n: int) -> List[np.random.Generator]:
    """Independent generators for ``n`` trials, derived from one seed."""
    return [np.random.default_rng(child)
            for child in np.random.SeedSequence(seed).spawn(n)]


def survey(params: DistributionParameters,
           seed: Optional[int] = DEFAULT_SEED,
           n_jobs: int = 1,
           progress: bool = False,
           burgers_vectors: Sequence[Vector2D] = TETRAGONAL_BURGERS_VECTORS
           ) -> Tuple[List[List[AbstractDislocation]], np.ndarray]:
    """
    Draw ``params.nsamples`` configurations and their strain fields.

    Parameters
    ----------
    params : DistributionParameters
        Lattice size, number of dislocations, coupling ratio, tolerance and
        number of samples.
    seed : int, optional
        Root seed (default: 42). ``None`` draws fresh entropy.
    n_jobs : int, optional
        Number of worker threads (default: 1, serial).
    progress : bool, optional
        Show a tqdm progress bar.
    burgers_vectors : Sequence[Vector2D], optional
        Allowed Burgers vectors (default: tetragonal set).

    Returns
    -------
    dislocations : List[List[AbstractDislocation]]
        One configuration per trial.
    strains : np.ndarray, shape (Lx, Ly, 3, nsamples)
        ``strains[:, :, :, trial]`` holds ``(B1g, B2g, Delta)`` of that trial.

    Raises
    ------
    ValueError
        If ``n_jobs < 1``.
    ConvergenceError
        Propagated from the periodic sums of any trial.
    """
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be at least 1, got {n_jobs}")

    distribution = RandomDislocationDistribution(params.Lx, params.Ly,
                                                 params.ndislocations,
                                                 burgers_vectors)
    rngs = spawn_generators(seed, params.nsamples)

    dislocations: List[Optional[List[AbstractDislocation]]] = [None] * params.nsamples
    strains = np.zeros((params.Lx, params.Ly, 3, params.nsamples), dtype=float)

    def run_trial(trial: int) -> int:
        dislocations[trial] = distribution.collect_dislocations(rngs[trial])
        generate_disorder(params.Lx, params.Ly, dislocations[trial],
                          include_splitting=True,
                          tolerance=params.rtol,
                          coupling_ratio=params.cratio,
                          out=strains[:, :, :, trial])
        return trial

    logger.info(f"Starting survey: {params.nsamples} trial(s) of {params.ndislocations} "
                f"dislocation(s) on {params.Lx}x{params.Ly}, n_jobs={n_jobs}")
    start = time.perf_counter()

    if n_jobs == 1:
        for trial in tqdm(range(params.nsamples), desc="Strain survey", disable=not progress):
            run_trial(trial)
    else:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            futures = [executor.submit(run_trial, trial) for trial in range(params.nsamples)]
            for future in tqdm(as_completed(futures), total=len(futures),
                               desc="Strain survey", disable=not progress):
                trial = future.result()
                logger.debug(f"Trial {trial} done")

    logger.info(f"Survey finished in {time.perf_counter() - start:.2f} s")
    return dislocations, strains


def strains_to_dataframe(strains: np.ndarray) -> pd.DataFrame:
    """
    Flatten survey strains into one row per (site, trial).

    Parameters
    ----------
    strains : np.ndarray, shape (Lx, Ly, 3, nsamples)
        Output of ``survey``.

    Returns
    -------
    df : pd.DataFrame
        Columns ``B1g``, ``B2g`` and ``Delta`` with ``Lx * Ly * nsamples``
        rows. Rows are grouped by trial, x varying fastest.
    """
    strains = np.asarray(strains)
    if strains.ndim != 4 or strains.shape[2] != len(STRAIN_COLUMNS):
        raise ValueError(f"Expected strains of shape (Lx, Ly, 3, nsamples), got {strains.shape}")

    return pd.DataFrame({
        name: strains[:, :, index, :].reshape(-1, order='F')
        for index, name in enumerate(STRAIN_COLUMNS)
    })


def run_survey(params: DistributionParameters,
               seed: Optional[int] = DEFAULT_SEED,
               n_jobs: int = 1,
               progress: bool = False,
               burgers_vectors: Sequence[Vector2D] = TETRAGONAL_BURGERS_VECTORS
               ) -> Dict[str, Any]:
    """
    Run a survey and collect everything it produced.

    Returns
    -------
    results : dict
        ``dislocations`` and ``strains`` as returned by ``survey``,
        ``parameters`` (``params.to_dict()``), ``seed``, ``name``
        (``params.savename()``) and ``dataframe`` (``strains_to_dataframe``).
    """
    dislocations, strains = survey(params, seed=seed, n_jobs=n_jobs,
                                   progress=progress, burgers_vectors=burgers_vectors)
    return {
        'dislocations': dislocations,
        'strains': strains,
        'parameters': params.to_dict(),
        'seed': seed,
        'name': params.savename(),
        'dataframe': strains_to_dataframe(strains),
    }
