"""
Unit tests for the dislocation shear fields.

Tests:
- Closed-form values
- Symmetries (odd, homogeneous of degree -1, linear in b)
- Scalar / array kernel agreement
- Level splitting
"""

import math

import numpy as np
import pytest
from randstrain.core.vectors import Vector2D, BoundaryCondition
from randstrain.core.defects import Dislocation2D, TETRAGONAL_BURGERS_VECTORS
from randstrain.fields import (
    b1g_shear,
    b2g_shear,
    b1g_shear_field,
    b2g_shear_field,
    b1g_kernel,
    b2g_kernel,
    bxg_shears,
    delta_splitting,
    SHEAR_CHANNELS,
)


class TestClosedFormValues:
    """Test shears at hand-computed points."""

    def test_diagonal_point(self):
        """Test r = (1, 1), b = (1, 0)."""
        r, b = Vector2D(1., 1.), Vector2D(1., 0.)
        assert b1g_shear(r, b) == pytest.approx(0.0, abs=1e-15)
        assert b2g_shear(r, b) == pytest.approx(-1 / (4 * math.pi))

    def test_off_axis_point(self):
        """Test r = (2, 1), b = (1, 0)."""
        r, b = Vector2D(2., 1.), Vector2D(1., 0.)
        assert b1g_shear(r, b) == pytest.approx(3 / (25 * math.pi))
        assert b2g_shear(r, b) == pytest.approx(-4 / (25 * math.pi))

    def test_perpendicular_burgers_vector(self):
        """Test b perpendicular to r gives no shear."""
        r, b = Vector2D(0., 3.), Vector2D(1., 0.)
        assert b1g_shear(r, b) == 0.0
        assert b2g_shear(r, b) == 0.0

    def test_singular_at_core(self):
        """Test the core is not guarded."""
        with pytest.raises(ZeroDivisionError):
            b1g_shear(Vector2D(0., 0.), Vector2D(1., 0.))


class TestSymmetries:
    """Test symmetry properties of the fields."""

    @pytest.mark.parametrize("shear", [b1g_shear, b2g_shear])
    def test_odd_in_displacement(self, shear):
        """Test f(-r) = -f(r)."""
        r, b = Vector2D(1.3, -0.4), Vector2D(0., 1.)
        assert shear(-r, b) == pytest.approx(-shear(r, b))

    @pytest.mark.parametrize("shear", [b1g_shear, b2g_shear])
    def test_homogeneous_degree_minus_one(self, shear):
        """Test f(2r) = f(r) / 2."""
        r, b = Vector2D(1.3, -0.4), Vector2D(1., 0.)
        assert shear(2 * r, b) == pytest.approx(shear(r, b) / 2)

    @pytest.mark.parametrize("shear", [b1g_shear, b2g_shear])
    def test_linear_in_burgers_vector(self, shear):
        """Test f(r, b1 + b2) = f(r, b1) + f(r, b2) and f(r, -b) = -f(r, b)."""
        r = Vector2D(2.5, 1.5)
        b1, b2 = Vector2D(1., 0.), Vector2D(0., 1.)
        assert shear(r, b1 + b2) == pytest.approx(shear(r, b1) + shear(r, b2))
        assert shear(r, -b1) == pytest.approx(-shear(r, b1))


class TestFieldForms:
    """Test the field-function and kernel forms agree."""

    def test_field_functions_use_origin(self):
        """Test field functions evaluate at position - origin."""
        dis = Dislocation2D(Vector2D(1., 0.), Vector2D(3., 4.))
        position = Vector2D(5., 5.)
        assert b1g_shear_field(position, dis) == b1g_shear(Vector2D(2., 1.), dis.burgers_vector)
        assert b2g_shear_field(position, dis) == b2g_shear(Vector2D(2., 1.), dis.burgers_vector)

    def test_kernels_match_scalar_functions(self):
        """Test the numpy kernels on random displacements."""
        rng = np.random.default_rng(11)
        rx = rng.uniform(-5, 5, size=50)
        ry = rng.uniform(-5, 5, size=50)

        for bob in TETRAGONAL_BURGERS_VECTORS:
            expected1 = [b1g_shear(Vector2D(x, y), bob) for x, y in zip(rx, ry)]
            expected2 = [b2g_shear(Vector2D(x, y), bob) for x, y in zip(rx, ry)]
            assert np.allclose(b1g_kernel(rx, ry, bob.x, bob.y), expected1)
            assert np.allclose(b2g_kernel(rx, ry, bob.x, bob.y), expected2)

    def test_channels(self):
        """Test the channel table."""
        names = [channel.name for channel in SHEAR_CHANNELS]
        assert names == ['B1g', 'B2g']
        assert SHEAR_CHANNELS[0].field is b1g_shear_field
        assert SHEAR_CHANNELS[1].kernel is b2g_kernel

    def test_bxg_shears_free(self):
        """Test both shears at once."""
        dis = Dislocation2D(Vector2D(1., 0.), Vector2D(0., 0.))
        b1, b2 = bxg_shears(Vector2D(1., 1.), dis)
        assert b1 == pytest.approx(0.0, abs=1e-15)
        assert b2 == pytest.approx(-1 / (4 * math.pi))

    def test_bxg_shears_minimum_image(self):
        """Test the nearest image is used with MINIMUM_IMAGE."""
        dis = Dislocation2D(Vector2D(1., 0.), Vector2D(1., 1.))
        b1, b2 = bxg_shears(Vector2D(9., 2.), dis, BoundaryCondition.MINIMUM_IMAGE, 10, 10)
        r = Vector2D(-2., 1.)
        assert b1 == pytest.approx(b1g_shear(r, dis.burgers_vector))
        assert b2 == pytest.approx(b2g_shear(r, dis.burgers_vector))


class TestDeltaSplitting:
    """Test the level splitting."""

    def test_pythagorean(self):
        """Test sqrt(3^2 + 4^2) = 5."""
        assert delta_splitting(3.0, 4.0) == pytest.approx(5.0)

    def test_coupling_ratio(self):
        """Test the B2g channel is scaled by the coupling ratio."""
        assert delta_splitting(3.0, 2.0, coupling_ratio=2.0) == pytest.approx(5.0)
        assert delta_splitting(3.0, 4.0, coupling_ratio=0.0) == pytest.approx(3.0)

    def test_non_negative_and_even(self):
        """Test Delta >= 0 and symmetric under sign flips."""
        rng = np.random.default_rng(5)
        e1 = rng.normal(size=100)
        e2 = rng.normal(size=100)
        delta = delta_splitting(e1, e2, 0.7)

        assert np.all(delta >= 0)
        assert np.allclose(delta, delta_splitting(-e1, e2, 0.7))
        assert np.allclose(delta, delta_splitting(e1, -e2, 0.7))

    def test_scalar_returns_float(self):
        """Test scalar inputs give a Python float."""
        assert isinstance(delta_splitting(1.0, 1.0), float)
        assert isinstance(delta_splitting(np.ones(3), np.ones(3)), np.ndarray)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
