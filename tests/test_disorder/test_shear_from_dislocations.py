"""
Unit tests for strain field assembly.

Tests:
- Output layout and channels
- Agreement with per-site periodic sums
- Linearity in the dislocation set
- Boundary policies
- Argument validation
"""

import numpy as np
import pytest
from randstrain.core.vectors import Vector2D, BoundaryCondition
from randstrain.core.defects import Dislocation2D
from randstrain.fields import (
    B1G,
    B2G,
    ConvergenceError,
    field_scale,
    pbc_field,
    bxg_shears,
    delta_splitting,
)
from randstrain.sampling import RandomDislocationDistribution
from randstrain.disorder import (
    DisorderConfiguration,
    ShearFromDislocations,
    generate_disorder,
    SPLITTING_CHANNEL,
)


@pytest.fixture
def dislocation():
    return Dislocation2D(Vector2D(1., 0.), Vector2D(4.5, 3.5))


@pytest.fixture
def pair():
    return [Dislocation2D(Vector2D(0., 1.), Vector2D(2.5, 5.5)),
            Dislocation2D(Vector2D(0., -1.), Vector2D(5.5, 2.5))]


class TestGenerateDisorderLayout:
    """Test the shape and channels of the generated field."""

    def test_two_channels(self, dislocation):
        """Test B1g and B2g only."""
        field = generate_disorder(8, 6, [dislocation], tolerance=1e-3)
        assert field.shape == (8, 6, 2)

    def test_splitting_channel(self, pair):
        """Test the third channel is the splitting of the summed shears."""
        field = generate_disorder(8, 8, pair, include_splitting=True,
                                  tolerance=1e-3, coupling_ratio=0.5)
        assert field.shape == (8, 8, 3)
        expected = delta_splitting(field[:, :, 0], field[:, :, 1], 0.5)
        assert np.allclose(field[:, :, SPLITTING_CHANNEL], expected)
        assert np.all(field[:, :, SPLITTING_CHANNEL] >= 0)

    def test_no_dislocations(self):
        """Test an empty configuration gives zero strain."""
        field = generate_disorder(4, 4, [], include_splitting=True)
        assert np.array_equal(field, np.zeros((4, 4, 3)))

    def test_out_argument(self, dislocation):
        """Test filling a preallocated array in place."""
        out = np.full((8, 8, 2), 99.0)
        result = generate_disorder(8, 8, [dislocation], tolerance=1e-3, out=out)
        assert result is out
        assert not np.any(out == 99.0)

    def test_out_argument_view(self, dislocation):
        """Test filling a strided slice of a larger array."""
        strains = np.zeros((8, 8, 3, 2))
        generate_disorder(8, 8, [dislocation], include_splitting=True, tolerance=1e-3,
                          out=strains[:, :, :, 1])
        assert np.all(strains[:, :, :, 0] == 0.0)
        assert np.any(strains[:, :, :, 1] != 0.0)

    def test_wrong_out_shape(self, dislocation):
        """Test mismatched output arrays are rejected."""
        with pytest.raises(ValueError, match="shape"):
            generate_disorder(8, 8, [dislocation], out=np.zeros((8, 8, 3)))


class TestGenerateDisorderValues:
    """Test assembled values."""

    def test_single_dislocation_matches_periodic_sums(self, dislocation):
        """Test each site equals its independent periodic sum."""
        field = generate_disorder(8, 8, [dislocation], tolerance=1e-4, atol=0.0)

        scale = field_scale(dislocation, 8, 8)
        for x, y in [(1, 1), (3, 7), (8, 2), (6, 6)]:
            position = Vector2D(x, y)
            b1, _ = pbc_field(B1G.field, position, dislocation, 8, 8, tolerance=1e-4,
                              scale=scale)
            b2, _ = pbc_field(B2G.field, position, dislocation, 8, 8, tolerance=1e-4,
                              scale=scale)
            # Index [x - 1, y - 1] holds site (x, y)
            assert field[x - 1, y - 1, 0] == pytest.approx(b1, rel=1e-3, abs=1e-8)
            assert field[x - 1, y - 1, 1] == pytest.approx(b2, rel=1e-3, abs=1e-8)

    def test_superposition(self, pair):
        """Test the field of a pair is the sum of the single fields."""
        both = generate_disorder(8, 8, pair, tolerance=1e-4)
        first = generate_disorder(8, 8, pair[:1], tolerance=1e-4)
        second = generate_disorder(8, 8, pair[1:], tolerance=1e-4)
        assert np.allclose(both, first + second, rtol=1e-12, atol=1e-15)

    def test_opposite_burgers_vector_flips_sign(self, dislocation):
        """Test the field is odd in the Burgers vector."""
        flipped = Dislocation2D(-dislocation.burgers_vector, dislocation.origin)
        field = generate_disorder(8, 8, [dislocation], tolerance=1e-4)
        flipped_field = generate_disorder(8, 8, [flipped], tolerance=1e-4)
        assert np.allclose(flipped_field, -field)

    def test_vectorized_matches_site_loop(self, pair):
        """Test both engines assemble the same field."""
        fast = generate_disorder(6, 6, pair, include_splitting=True, tolerance=1e-3)
        slow = generate_disorder(6, 6, pair, include_splitting=True, tolerance=1e-3,
                                 vectorized=False)
        assert np.allclose(fast, slow, rtol=1e-2, atol=1e-6)

    def test_non_convergence_propagates(self, dislocation):
        """Test the ring cap surfaces through assembly."""
        with pytest.raises(ConvergenceError):
            generate_disorder(8, 8, [dislocation], tolerance=1e-12, max_rings=1, atol=0.0)

class TestDefaultSettings:
    """Test assembly of random ensembles with default convergence settings."""

    @pytest.mark.parametrize("seed", range(4))
    def test_random_configurations_converge(self, seed):
        """Test default assembly of random neutral configurations."""
        distribution = RandomDislocationDistribution(8, ndislocations=4)
        dislocations = distribution.collect_dislocations(np.random.default_rng(seed))
        field = generate_disorder(8, 8, dislocations, include_splitting=True)
        assert field.shape == (8, 8, 3)
        assert np.all(np.isfinite(field))

    def test_default_scale_is_field_scale(self, dislocation):
        """Test the default floor of each dislocation."""
        config = ShearFromDislocations(8, 4, [dislocation])
        assert config.image_sum_scale(dislocation) == field_scale(dislocation, 8, 4)
        assert ShearFromDislocations(8, 4, [], scale=0.0).image_sum_scale(dislocation) == 0.0

    def test_scale_matches_relative_sum(self, dislocation):
        """Test the floor only changes values at the level of tolerance * scale."""
        floored = generate_disorder(8, 8, [dislocation], tolerance=1e-4)
        relative = generate_disorder(8, 8, [dislocation], tolerance=1e-4, scale=0.0)
        scale = field_scale(dislocation, 8, 8)
        assert np.allclose(floored, relative, rtol=1e-2, atol=10 * 1e-4 * scale)

    def test_negative_scale(self, dislocation):
        """Test scale validation."""
        with pytest.raises(ValueError, match="scale"):
            generate_disorder(8, 8, [dislocation], scale=-1.0)


class TestBoundaryPolicies:
    """Test FREE and MINIMUM_IMAGE assembly."""

    def test_free(self, dislocation):
        """Test FREE evaluates the bare field."""
        field = generate_disorder(8, 8, [dislocation], boundary=BoundaryCondition.FREE)
        expected = bxg_shears(Vector2D(8., 1.), dislocation)
        assert np.allclose(field[7, 0], expected)

    def test_minimum_image(self, dislocation):
        """Test MINIMUM_IMAGE uses the nearest image."""
        field = generate_disorder(8, 8, [dislocation], boundary='minimum_image')
        expected = bxg_shears(Vector2D(1., 8.), dislocation,
                              BoundaryCondition.MINIMUM_IMAGE, 8, 8)
        assert np.allclose(field[0, 7], expected)
        # y = 8 lies 4.5 above the origin and folds to -3.5
        assert not np.allclose(field[0, 7], bxg_shears(Vector2D(1., 8.), dislocation))


class TestShearFromDislocations:
    """Test the configuration object."""

    def test_interface(self, pair):
        """Test sizes and channel counts."""
        config = ShearFromDislocations(8, 6, pair, include_splitting=True)
        assert isinstance(config, DisorderConfiguration)
        assert config.system_size() == (8, 6)
        assert config.n_channels == 3
        assert config.field_shape() == (8, 6, 3)
        assert config.boundary is BoundaryCondition.PERIODIC

    def test_site_coordinates(self, pair):
        """Test site coordinates start at 1."""
        xs, ys = ShearFromDislocations(4, 3, pair).site_coordinates()
        assert xs.shape == (4, 3)
        assert xs[0, 0] == 1.0 and ys[0, 0] == 1.0
        assert xs[3, 2] == 4.0 and ys[3, 2] == 3.0

    def test_generate_disorder_into_overwrites(self, pair):
        """Test previous contents are discarded."""
        config = ShearFromDislocations(6, 6, pair, tolerance=1e-3)
        field = config.generate_disorder()
        again = config.generate_disorder_into(np.full(config.field_shape(), 5.0))
        assert np.allclose(again, field)

    @pytest.mark.parametrize("Lx, Ly", [(0, 4), (4, -1)])
    def test_invalid_size(self, Lx, Ly):
        """Test non-positive sizes."""
        with pytest.raises(ValueError, match="positive"):
            generate_disorder(Lx, Ly, [])

    def test_invalid_dislocations(self):
        """Test non-dislocation sources."""
        with pytest.raises(TypeError, match="AbstractDislocation"):
            ShearFromDislocations(4, 4, [Vector2D(1., 1.)])

    def test_invalid_boundary(self):
        """Test unknown boundary names."""
        with pytest.raises(ValueError):
            ShearFromDislocations(4, 4, [], boundary='twisted')

    def test_repr(self, pair):
        """Test string representation."""
        assert repr(ShearFromDislocations(8, 6, pair)) == \
            "ShearFromDislocations(Lx=8, Ly=6, n_channels=2)"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
