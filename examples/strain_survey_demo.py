"""
Strain Survey Demo

This example walks through the package from a single dislocation to a full
Monte Carlo survey:
- Closed-form shears of one dislocation
- Periodic image sums and their convergence
- Strain field of a dislocation pair on a periodic lattice
- A small random survey with statistics and correlations

Run after ``pip install -e .``; figures are written to the working directory.
"""

import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from randstrain import (
    Vector2D,
    Dislocation2D,
    b1g_shear,
    b2g_shear,
    pbc_field,
    generate_disorder,
    DistributionParameters,
    run_survey,
    setup_logging,
)
from randstrain.fields import b2g_shear_field
from randstrain.analysis import survey_statistics, average_correlations
from randstrain.visualization import plot_strain_fields, plot_strain_histograms


def example_single_dislocation():
    """Example 1: shears at a few points around one dislocation."""
    print("=" * 60)
    print("Example 1: Shears of a single edge dislocation")
    print("=" * 60)

    bob = Vector2D(1.0, 0.0)
    for r in (Vector2D(1.0, 1.0), Vector2D(2.0, 1.0), Vector2D(0.0, 3.0)):
        print(f"  r = {r}: B1g = {b1g_shear(r, bob):+.6f}, B2g = {b2g_shear(r, bob):+.6f}")


def example_periodic_sum():
    """Example 2: periodic image sum at decreasing tolerance."""
    print("\n" + "=" * 60)
    print("Example 2: Periodic image sum of B2g on a 16 x 16 cell")
    print("=" * 60)

    dis = Dislocation2D(Vector2D(1.0, 0.0), Vector2D(8.5, 8.5))
    position = Vector2D(3.0, 5.0)
    for tolerance in (1e-1, 1e-3, 1e-5):
        value, rings = pbc_field(b2g_shear_field, position, dis, 16, 16, tolerance)
        print(f"  tolerance = {tolerance:.0e}: value = {value:+.8f} after {rings} rings")


def example_dislocation_pair():
    """Example 3: strain field of a neutral pair."""
    print("\n" + "=" * 60)
    print("Example 3: Strain field of a dislocation pair")
    print("=" * 60)

    pair = [Dislocation2D(Vector2D(1.0, 0.0), Vector2D(8.5, 16.5)),
            Dislocation2D(Vector2D(-1.0, 0.0), Vector2D(24.5, 16.5))]
    field = generate_disorder(32, 32, pair, include_splitting=True, tolerance=1e-4)
    print(f"  field shape: {field.shape}")
    print(f"  max |B1g| = {abs(field[:, :, 0]).max():.4f}, max Delta = {field[:, :, 2].max():.4f}")

    fig = plot_strain_fields(field, dislocations=pair)
    fig.savefig('dislocation_pair.png', bbox_inches='tight')
    plt.close(fig)


def example_survey():
    """Example 4: a small random survey."""
    print("\n" + "=" * 60)
    print("Example 4: Random strain survey")
    print("=" * 60)

    params = DistributionParameters(Lx=32, ndislocations=8, rtol=1e-2, nsamples=8)
    print(f"  parameters: {params.savename()}")
    print(f"  concentration: {params.concentration:.4f}")

    results = run_survey(params, seed=7, n_jobs=2, progress=True)
    summary = survey_statistics(results['dataframe'], results['dislocations'])
    print(summary[['VarianceB1g', 'VarianceB2g', 'MeanDelta',
                   'CoVarianceB1gB2g', 'CoKurtosisB1gB2g']].T)

    correlations = average_correlations(results['strains'])
    print(f"  correlation maps: {sorted(correlations)}")

    fig = plot_strain_histograms(results['strains'])
    fig.savefig('survey_histograms.png', bbox_inches='tight')
    plt.close(fig)


if __name__ == '__main__':
    setup_logging(logging.INFO)

    example_single_dislocation()
    example_periodic_sum()
    example_dislocation_pair()
    example_survey()
