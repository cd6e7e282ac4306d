"""
Unit tests for uniform dislocation sampling.

Tests:
- Single random dislocations
- Charge neutrality and distinct origins
- Reproducibility from a seeded generator
"""

import numpy as np
import pytest
from randstrain.core.vectors import Vector2D
from randstrain.core.defects import TETRAGONAL_BURGERS_VECTORS
from randstrain.sampling import (
    RandomDislocation,
    RandomStrainDistribution,
    UniformBurgersVector,
    RandomDislocationDistribution,
    collect_dislocations,
)


class TestUniformBurgersVector:
    """Test single random dislocations."""

    def test_interface(self):
        """Test sizes and defaults."""
        rbv = UniformBurgersVector(6, 4)
        assert isinstance(rbv, RandomDislocation)
        assert rbv.system_size() == (6, 4)
        assert rbv.n_sources == 24
        assert rbv.burgers_vectors == TETRAGONAL_BURGERS_VECTORS

    def test_square_default(self):
        """Test Ly defaults to Lx."""
        assert UniformBurgersVector(5).system_size() == (5, 5)

    def test_origins_on_plaquette_centres(self):
        """Test origins are half-integer and inside [1.5, L + 0.5]."""
        rbv = UniformBurgersVector(4, 3)
        rng = np.random.default_rng(1)
        for _ in range(200):
            origin = rbv.rand_dislocation_source(rng)
            assert origin.x - np.floor(origin.x) == 0.5
            assert origin.y - np.floor(origin.y) == 0.5
            assert 1.5 <= origin.x <= 4.5
            assert 1.5 <= origin.y <= 3.5

    def test_every_plaquette_reachable(self):
        """Test all origins are drawn eventually."""
        rbv = UniformBurgersVector(3)
        rng = np.random.default_rng(2)
        seen = {rbv.rand_dislocation_source(rng) for _ in range(500)}
        assert len(seen) == 9

    def test_burgers_vectors_from_set(self):
        """Test Burgers vectors come from the allowed set."""
        allowed = (Vector2D(1., 1.), Vector2D(-1., -1.))
        rbv = UniformBurgersVector(8, burgers_vectors=allowed)
        rng = np.random.default_rng(3)
        drawn = {rbv.rand_burgers_vector(rng) for _ in range(100)}
        assert drawn == set(allowed)

    def test_rand_dislocation(self):
        """Test a full random dislocation."""
        rbv = UniformBurgersVector(8)
        dis = rbv.rand_dislocation(np.random.default_rng(4))
        assert dis.burgers_vector in TETRAGONAL_BURGERS_VECTORS

    def test_invalid_arguments(self):
        """Test argument validation."""
        with pytest.raises(ValueError, match="positive"):
            UniformBurgersVector(0)
        with pytest.raises(ValueError, match="At least one"):
            UniformBurgersVector(4, burgers_vectors=[])
        with pytest.raises(TypeError, match="Vector2D"):
            UniformBurgersVector(4, burgers_vectors=[(1., 0.)])


class TestCollectDislocations:
    """Test charge-neutral configurations."""

    @pytest.fixture
    def rbv(self):
        return UniformBurgersVector(8)

    def test_count(self, rbv):
        """Test the requested number is drawn."""
        dislocations = collect_dislocations(np.random.default_rng(0), rbv, 10)
        assert len(dislocations) == 10

    def test_neutrality(self, rbv):
        """Test the Burgers vectors sum to zero exactly."""
        dislocations = collect_dislocations(np.random.default_rng(5), rbv, 12)
        total = sum((d.burgers_vector for d in dislocations), Vector2D.zero_vector())
        assert total == Vector2D(0., 0.)

    def test_second_half_negates_first(self, rbv):
        """Test pairing of opposite Burgers vectors."""
        dislocations = collect_dislocations(np.random.default_rng(6), rbv, 8)
        for first, second in zip(dislocations[:4], dislocations[4:]):
            assert second.burgers_vector == -first.burgers_vector

    def test_distinct_origins(self, rbv):
        """Test no two dislocations share an origin."""
        dislocations = collect_dislocations(np.random.default_rng(7), rbv, 40)
        origins = {d.origin for d in dislocations}
        assert len(origins) == 40

    def test_full_occupancy(self):
        """Test filling every plaquette of a small cell."""
        rbv = UniformBurgersVector(2)
        dislocations = collect_dislocations(np.random.default_rng(8), rbv, 4)
        assert {d.origin for d in dislocations} == {
            Vector2D(1.5, 1.5), Vector2D(1.5, 2.5), Vector2D(2.5, 1.5), Vector2D(2.5, 2.5)}

    def test_empty(self, rbv):
        """Test zero dislocations."""
        assert collect_dislocations(np.random.default_rng(9), rbv, 0) == []

    def test_reproducible(self, rbv):
        """Test equal seeds give equal configurations."""
        first = collect_dislocations(np.random.default_rng(11), rbv, 6)
        second = collect_dislocations(np.random.default_rng(11), rbv, 6)
        assert first == second

    @pytest.mark.parametrize("n, message", [
        (-2, "non-negative"),
        (3, "even number"),
        (66, "Cannot place"),
    ])
    def test_invalid_counts(self, rbv, n, message):
        """Test invalid dislocation counts."""
        with pytest.raises(ValueError, match=message):
            collect_dislocations(np.random.default_rng(0), rbv, n)


class TestRandomDislocationDistribution:
    """Test the configuration distribution."""

    def test_interface(self):
        """Test sizes and concentration."""
        dist = RandomDislocationDistribution(8, 4, ndislocations=4)
        assert isinstance(dist, RandomStrainDistribution)
        assert dist.system_size() == (8, 4)
        assert dist.concentration == pytest.approx(4 / 32)

    def test_collect(self):
        """Test configurations are neutral and sized."""
        dist = RandomDislocationDistribution(6, ndislocations=6)
        dislocations = dist.collect_dislocations(np.random.default_rng(12))
        assert len(dislocations) == 6
        assert sum(d.burgers_vector.x for d in dislocations) == 0.0
        assert sum(d.burgers_vector.y for d in dislocations) == 0.0

    @pytest.mark.parametrize("n", [-2, 5, 18])
    def test_invalid_ndislocations(self, n):
        """Test odd, negative and oversized counts."""
        with pytest.raises(ValueError, match="ndislocations"):
            RandomDislocationDistribution(4, ndislocations=n)

    def test_repr(self):
        """Test string representation."""
        assert repr(RandomDislocationDistribution(4, ndislocations=2)) == \
            "RandomDislocationDistribution(Lx=4, Ly=4, ndislocations=2)"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
