"""
Tests for orbiting bodies and per-frame placement.
"""

import pytest
import numpy as np

from kepler_orbits.dynamics.kepler_solver import (InvalidInput, KeplerSolver,
                                                  KeplerSolverConfig)
from kepler_orbits.simulation.bodies import (
    OrbitingBody, SOLAR_SYSTEM_BODIES, create_solar_system, frame_positions
)


class TestOrbitingBody:
    """Test body creation and placement."""

    def test_body_creation(self):
        body = OrbitingBody("Test", distance=5.0, speed=0.5, eccentricity=0.2)

        assert body.radius == 1.0
        assert body.mean_anomaly_at_epoch == 0.0
        assert abs(body.period - 4 * np.pi) < 1e-12

    def test_body_validation(self):
        with pytest.raises(ValueError):
            OrbitingBody("", distance=5.0, speed=0.5)
        with pytest.raises(ValueError):
            OrbitingBody("Bad", distance=-5.0, speed=0.5)
        with pytest.raises(ValueError):
            OrbitingBody("Bad", distance=5.0, speed=0.5, eccentricity=1.0)
        with pytest.raises(ValueError):
            OrbitingBody("Bad", distance=5.0, speed=float('nan'))
        with pytest.raises(ValueError):
            OrbitingBody("Bad", distance=5.0, speed=0.5, radius=0.0)

    def test_stationary_body_period(self):
        body = OrbitingBody("Still", distance=3.0, speed=0.0)
        assert body.period == float('inf')

    def test_circular_position(self):
        """Zero eccentricity reproduces uniform circular placement."""
        body = OrbitingBody("Earth", distance=8.0, speed=1.0)
        for t in [0.0, 1.3, 10.0]:
            np.testing.assert_allclose(body.position(t),
                                       [8.0 * np.cos(t), 0.0, 8.0 * np.sin(t)],
                                       atol=1e-12)

    def test_elliptic_distance_bounds(self):
        body = OrbitingBody("Comet", distance=10.0, speed=0.3, eccentricity=0.5)
        for t in np.linspace(0.0, body.period, 50):
            r = np.linalg.norm(body.position(t))
            assert 5.0 - 1e-9 <= r <= 15.0 + 1e-9

    def test_periodic(self):
        body = OrbitingBody("Mercury", distance=4.0, speed=1.6, eccentricity=0.2056)
        np.testing.assert_allclose(body.position(0.7),
                                   body.position(0.7 + body.period), atol=1e-9)

    def test_true_anomaly_range(self):
        body = OrbitingBody("Mars", distance=10.0, speed=0.8, eccentricity=0.0934)
        for t in np.linspace(-20.0, 20.0, 41):
            f = body.true_anomaly(t)
            assert 0.0 <= f < 2 * np.pi

    def test_custom_solver(self):
        body = OrbitingBody("Comet", distance=10.0, speed=0.3, eccentricity=0.5)
        solver = KeplerSolver(KeplerSolverConfig(max_iterations=50, tolerance=1e-13))

        assert abs(body.eccentric_anomaly(2.0, solver) - body.eccentric_anomaly(2.0)) < 1e-10


class TestSolarSystem:
    """Test the planet catalogue."""

    def test_catalogue(self):
        names = [body.name for body in SOLAR_SYSTEM_BODIES]
        assert names == ["Mercury", "Venus", "Earth", "Mars",
                         "Jupiter", "Saturn", "Uranus", "Neptune"]

        distances = [body.distance for body in SOLAR_SYSTEM_BODIES]
        assert distances == sorted(distances)
        assert all(0.0 <= body.eccentricity < 0.25 for body in SOLAR_SYSTEM_BODIES)

    def test_circular_copy(self):
        bodies = create_solar_system(circular=True)

        assert all(body.eccentricity == 0.0 for body in bodies)
        assert SOLAR_SYSTEM_BODIES[0].eccentricity > 0.0

    def test_copy_is_independent(self):
        bodies = create_solar_system()
        bodies[0].speed = 99.0
        assert SOLAR_SYSTEM_BODIES[0].speed == 1.6


class TestFramePositions:
    """Test batched per-frame placement."""

    def test_matches_individual_placement(self):
        bodies = create_solar_system()
        t = 3.7

        positions = frame_positions(bodies, t)

        assert set(positions) == {body.name for body in bodies}
        for body in bodies:
            np.testing.assert_allclose(positions[body.name], body.position(t), atol=1e-12)

    def test_circular_frame(self):
        t = 1.25
        positions = frame_positions(create_solar_system(circular=True), t)

        for body in SOLAR_SYSTEM_BODIES:
            angle = body.speed * t
            expected = [body.distance * np.cos(angle), 0.0, body.distance * np.sin(angle)]
            np.testing.assert_allclose(positions[body.name], expected, atol=1e-12)

    def test_bodies_stay_in_plane(self):
        positions = frame_positions(create_solar_system(), 42.0)
        assert all(abs(p[1]) == 0.0 for p in positions.values())

    def test_duplicate_names(self):
        body = OrbitingBody("Twin", distance=1.0, speed=1.0)
        with pytest.raises(InvalidInput):
            frame_positions([body, body], 0.0)

    def test_empty_frame(self):
        assert frame_positions([], 0.0) == {}


if __name__ == "__main__":
    pytest.main([__file__])
