"""Tests for integer hash noise."""

import numpy as np

from randnoise import discrete_noise


class TestDiscreteNoise:
    """Tests for discrete_noise."""

    def test_known_values(self):
        """Hash values of 32-bit wraparound arithmetic."""
        assert discrete_noise(123, 444) == 1859774917 / 2147483647
        assert discrete_noise(123, 445) == 1009925341 / 2147483647
        assert discrete_noise(-5, 3) == 1179021587 / 2147483647

    def test_deterministic(self):
        assert discrete_noise(123, 444) == discrete_noise(123, 444)

    def test_neighbours_differ(self):
        assert discrete_noise(123, 444) != discrete_noise(123, 445)

    def test_default_y(self):
        assert discrete_noise(123) == discrete_noise(123, 0)
        assert discrete_noise(123) == 619147373 / 2147483647

    def test_scalar_returns_float(self):
        assert isinstance(discrete_noise(7, 8), float)

    def test_range(self):
        x, y = np.meshgrid(np.arange(-500, 500), np.arange(-50, 50))
        values = discrete_noise(x, y)
        assert values.shape == x.shape
        assert np.all((values >= 0.0) & (values <= 1.0))
        assert 0.45 < values.mean() < 0.55

    def test_array_matches_scalar(self):
        xs = np.array([0, 1, 180, -77, 2**31 - 1])
        np.testing.assert_array_equal(discrete_noise(xs, 9), [discrete_noise(int(x), 9) for x in xs])
