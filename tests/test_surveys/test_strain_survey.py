"""
Unit tests for strain surveys.

Tests:
- Output shapes and trial independence
- Seed reproducibility, serial and threaded
- DataFrame flattening
"""

import logging

import numpy as np
import pandas as pd
import pytest
from randstrain.core.vectors import Vector2D
from randstrain.disorder import generate_disorder
from randstrain.surveys import (
    DistributionParameters,
    spawn_generators,
    survey,
    run_survey,
    strains_to_dataframe,
)


@pytest.fixture(scope='module')
def params():
    return DistributionParameters(Lx=8, ndislocations=4, rtol=1e-2, nsamples=3)


@pytest.fixture(scope='module')
def serial_result(params):
    return survey(params, seed=7)


class TestSpawnGenerators:
    """Test per-trial random streams."""

    def test_reproducible(self):
        """Test equal seeds give equal streams."""
        first = [rng.random() for rng in spawn_generators(3, 4)]
        second = [rng.random() for rng in spawn_generators(3, 4)]
        assert first == second

    def test_independent(self):
        """Test the streams differ from each other."""
        draws = [rng.random() for rng in spawn_generators(3, 4)]
        assert len(set(draws)) == 4


class TestSurvey:
    """Test survey output."""

    def test_shapes(self, params, serial_result):
        """Test one configuration and one field slice per trial."""
        dislocations, strains = serial_result
        assert len(dislocations) == 3
        assert all(len(config) == 4 for config in dislocations)
        assert strains.shape == (8, 8, 3, 3)

    def test_trials_match_single_assembly(self, params, serial_result):
        """Test each slice is the field of its own configuration."""
        dislocations, strains = serial_result
        for trial, config in enumerate(dislocations):
            expected = generate_disorder(8, 8, config, include_splitting=True,
                                         tolerance=params.rtol,
                                         coupling_ratio=params.cratio)
            assert np.array_equal(strains[:, :, :, trial], expected)

    def test_neutral_configurations(self, serial_result):
        """Test every configuration is charge neutral."""
        dislocations, _ = serial_result
        for config in dislocations:
            total = sum((d.burgers_vector for d in config), Vector2D.zero_vector())
            assert total == Vector2D(0., 0.)

    def test_splitting_non_negative(self, serial_result):
        """Test the splitting channel."""
        _, strains = serial_result
        assert np.all(strains[:, :, 2, :] >= 0)

    def test_seed_reproducibility(self, params, serial_result):
        """Test equal seeds reproduce the survey."""
        dislocations, strains = survey(params, seed=7)
        assert dislocations == serial_result[0]
        assert np.array_equal(strains, serial_result[1])

    def test_different_seeds(self, params, serial_result):
        """Test different seeds give different configurations."""
        dislocations, _ = survey(params, seed=8)
        assert dislocations != serial_result[0]

    def test_threaded_matches_serial(self, params, serial_result):
        """Test worker threads do not change the result."""
        dislocations, strains = survey(params, seed=7, n_jobs=2)
        assert dislocations == serial_result[0]
        assert np.array_equal(strains, serial_result[1])

    def test_invalid_jobs(self, params):
        """Test n_jobs validation."""
        with pytest.raises(ValueError, match="n_jobs"):
            survey(params, n_jobs=0)

    def test_logging(self, caplog):
        """Test start and finish are logged."""
        small = DistributionParameters(Lx=4, ndislocations=2, rtol=1e-2)
        with caplog.at_level(logging.INFO, logger='randstrain'):
            survey(small, seed=1)
        messages = [record.getMessage() for record in caplog.records]
        assert any("Starting survey" in m for m in messages)
        assert any("Survey finished" in m for m in messages)


class TestStrainsToDataFrame:
    """Test flattening into a DataFrame."""

    def test_layout(self):
        """Test rows are grouped by trial with x varying fastest."""
        strains = np.arange(2 * 3 * 3 * 2, dtype=float).reshape((2, 3, 3, 2))
        df = strains_to_dataframe(strains)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['B1g', 'B2g', 'Delta']
        assert len(df) == 12

        # Row 1 is site x = 2, y = 1 of trial 0; row 6 is site (1, 1) of trial 1
        assert df['B1g'].iloc[1] == strains[1, 0, 0, 0]
        assert df['B2g'].iloc[2] == strains[0, 1, 1, 0]
        assert df['Delta'].iloc[6] == strains[0, 0, 2, 1]

    def test_invalid_shape(self):
        """Test non-survey arrays are rejected."""
        with pytest.raises(ValueError, match="Expected strains"):
            strains_to_dataframe(np.zeros((4, 4, 2, 1)))


class TestRunSurvey:
    """Test the bundled survey result."""

    def test_keys(self, params):
        """Test every product is present."""
        results = run_survey(params, seed=7)
        assert set(results) == {'dislocations', 'strains', 'parameters',
                                'seed', 'name', 'dataframe'}
        assert results['parameters'] == params.to_dict()
        assert results['name'] == params.savename()
        assert len(results['dataframe']) == 8 * 8 * 3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
