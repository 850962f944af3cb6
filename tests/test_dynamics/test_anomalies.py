"""
Unit tests for anomaly conversions and ellipse placement.
"""

import pytest
import numpy as np

from kepler_orbits.dynamics.anomalies import (
    mean_anomaly_at_time, eccentric_to_true_anomaly, true_to_eccentric_anomaly,
    orbital_radius, ellipse_position, scene_position
)
from kepler_orbits.dynamics.kepler_solver import DomainError, InvalidInput
from kepler_orbits.utils.math_utils import wrap_to_pi


class TestMeanAnomaly:

    def test_uniform_motion(self):
        assert mean_anomaly_at_time(2.0, 0.5) == 1.0
        assert mean_anomaly_at_time(2.0, 0.5, mean_anomaly_at_epoch=0.25) == 1.25

    def test_not_wrapped(self):
        assert mean_anomaly_at_time(100.0, 1.0) == 100.0

    def test_array_times(self):
        t = np.array([0.0, 1.0, 2.0])
        np.testing.assert_allclose(mean_anomaly_at_time(t, 1.6), [0.0, 1.6, 3.2])


class TestAnomalyConversions:

    def test_circular_orbit_identity(self):
        for E in [-2.0, 0.0, 0.7, 3.0]:
            assert abs(wrap_to_pi(eccentric_to_true_anomaly(E, 0.0) - E)) < 1e-12

    def test_apsides(self):
        """Periapsis and apoapsis coincide in both anomalies."""
        assert abs(eccentric_to_true_anomaly(0.0, 0.6)) < 1e-12
        assert abs(abs(eccentric_to_true_anomaly(np.pi, 0.6)) - np.pi) < 1e-12

    def test_true_anomaly_leads_eccentric_anomaly(self):
        """On the outbound half the true anomaly runs ahead."""
        E = 1.0
        assert eccentric_to_true_anomaly(E, 0.5) > E

    def test_round_trip(self):
        for e in [0.0, 0.1, 0.5, 0.9]:
            for E in [-3.0, -1.0, 0.5, 2.5]:
                f = eccentric_to_true_anomaly(E, e)
                assert abs(true_to_eccentric_anomaly(f, e) - E) < 1e-12

    def test_invalid_eccentricity(self):
        with pytest.raises(DomainError):
            eccentric_to_true_anomaly(1.0, 1.0)
        with pytest.raises(InvalidInput):
            true_to_eccentric_anomaly(1.0, float('nan'))


class TestEllipsePlacement:

    def test_periapsis_and_apoapsis(self):
        a, e = 10.0, 0.3

        x, y = ellipse_position(0.0, a, e)
        assert abs(x - a * (1 - e)) < 1e-12
        assert abs(y) < 1e-12

        x, y = ellipse_position(np.pi, a, e)
        assert abs(x + a * (1 + e)) < 1e-12
        assert abs(y) < 1e-12

    def test_distance_matches_radius(self):
        a, e = 8.0, 0.4
        for E in np.linspace(0, 2 * np.pi, 13):
            x, y = ellipse_position(E, a, e)
            assert abs(np.hypot(x, y) - orbital_radius(E, a, e)) < 1e-12

    def test_semi_minor_axis(self):
        a, e = 5.0, 0.6
        _, y = ellipse_position(np.pi / 2, a, e)
        assert abs(y - a * np.sqrt(1 - e**2)) < 1e-12

    def test_circular_scene_position(self):
        """A circular orbit lies on (d cos t, 0, d sin t)."""
        d = 6.0
        for t in [0.0, 0.4, 2.0, 5.5]:
            np.testing.assert_allclose(scene_position(t, d, 0.0),
                                       [d * np.cos(t), 0.0, d * np.sin(t)],
                                       atol=1e-12)

    def test_vectorized(self):
        E = np.linspace(0, np.pi, 5)
        x, y = ellipse_position(E, 2.0, 0.1)
        assert x.shape == (5,)
        assert y.shape == (5,)

    def test_scene_position_vectorized(self):
        E = np.linspace(0, 2 * np.pi, 7)
        a, e = 4.0, 0.25

        positions = scene_position(E, a, e)

        assert positions.shape == (7, 3)
        np.testing.assert_array_equal(positions[:, 1], np.zeros(7))
        for k, angle in enumerate(E):
            np.testing.assert_allclose(positions[k], scene_position(angle, a, e), atol=1e-12)

    def test_scene_position_scalar_shape(self):
        assert scene_position(1.0, 3.0, 0.1).shape == (3,)

    def test_invalid_semi_major_axis(self):
        with pytest.raises(InvalidInput):
            ellipse_position(0.0, 0.0, 0.1)
        with pytest.raises(InvalidInput):
            orbital_radius(0.0, -1.0, 0.1)

    def test_invalid_eccentricity(self):
        with pytest.raises(DomainError):
            ellipse_position(0.0, 1.0, -0.2)


if __name__ == "__main__":
    pytest.main([__file__])
