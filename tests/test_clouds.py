"""Tests for clouds module."""

import numpy as np
import pytest

from clouds import CloudField, threshold_density, time_offset
from constants import (
    NUM_POINTS, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING, SPEED_MULTIPLIER, SPEEDUP_FACTOR
)


@pytest.fixture(scope="module")
def field():
    return CloudField(seed=42, size=24)


class TestThresholdDensity:
    """Tests for the cutoff and remap of raw noise magnitudes."""

    @pytest.mark.parametrize("raw", [0.0, 0.1, 0.35, 0.5999])
    def test_below_cutoff_is_exactly_zero(self, raw):
        assert threshold_density(raw, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == 0.0

    def test_cutoff_maps_to_zero(self):
        assert threshold_density(ZERO_ALPHA_THRESHOLD, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == 0.0

    def test_linear_remap(self):
        assert threshold_density(0.9, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == pytest.approx(0.5)

    def test_upper_bound(self):
        assert threshold_density(1.2, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == pytest.approx(1.0)
        assert threshold_density(3.0, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == 1.0

    def test_nan_is_no_cloud(self):
        assert threshold_density(np.nan, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING) == 0.0


class TestTimeOffset:
    """Tests for converting frames to noise time."""

    def test_frame_zero(self):
        assert time_offset(0, False) == 0.0
        assert time_offset(0, True) == 0.0

    def test_normal_speed(self):
        assert time_offset(1000, False) == pytest.approx(1000 * SPEED_MULTIPLIER)

    def test_speedup(self):
        assert time_offset(1000, True) == pytest.approx(1000 * SPEED_MULTIPLIER * SPEEDUP_FACTOR)


class TestCloudField:
    """Tests for the parallel density grid."""

    def test_initial_density_is_empty(self):
        field = CloudField(seed=1)
        assert field.density.shape == (NUM_POINTS, NUM_POINTS)
        assert not field.density.any()

    def test_shape(self, field):
        assert field.generate(0.0).shape == (24, 24)

    @pytest.mark.parametrize("delta", [0.0, 0.05, 1.7, 12.5])
    def test_values_in_unit_range(self, field, delta):
        grid = field.generate(delta)
        assert not np.isnan(grid).any()
        assert grid.min() >= 0.0
        assert grid.max() <= 1.0

    def test_deterministic(self, field):
        """Same seed and time give the same grid, across instances too."""
        other = CloudField(seed=42, size=24)
        assert np.array_equal(field.generate(0.3), field.generate(0.3))
        assert np.array_equal(field.generate(0.3), other.generate(0.3))

    def test_update_replaces_grid(self):
        field = CloudField(seed=42, size=8)
        before = field.density
        after = field.update(0.01)
        assert after is field.density
        assert after is not before
        assert after.shape == before.shape

    def test_published_grid_is_read_only(self):
        """Grids handed out by update cannot be written through."""
        field = CloudField(seed=42, size=8)
        with pytest.raises(ValueError):
            field.density[0, 0] = 1.0
        grid = field.update(0.01)
        with pytest.raises(ValueError):
            grid[0, 0] = 1.0


    def test_full_size_grid(self):
        grid = CloudField(seed=5).generate(0.02)
        assert grid.shape == (NUM_POINTS, NUM_POINTS)
        assert 0.0 <= grid.min() <= grid.max() <= 1.0
