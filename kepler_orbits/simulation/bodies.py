"""
Orbiting Bodies and Per-Frame Placement

This module describes the bodies animated around the central star and
places them for a given scene time. Each body is advanced by uniform mean
motion, its eccentric anomaly is found with the Kepler solver and the result
is mapped onto the scene's XZ plane.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass

from ..dynamics.anomalies import (eccentric_to_true_anomaly, mean_anomaly_at_time,
                                  scene_position)
from ..dynamics.kepler_solver import KeplerSolver, InvalidInput
from ..utils.constants import TWO_PI
from ..utils.math_utils import is_elliptic, is_finite, wrap_to_2pi


@dataclass
class OrbitingBody:
    """
    A body on a fixed elliptic orbit about the scene origin.

    Attributes:
        name: Display name (unique within a scene)
        distance: Semi-major axis [scene units]
        speed: Mean angular rate [rad per scene second]
        eccentricity: Orbital eccentricity [-]
        radius: Display radius of the body [scene units]
        mean_anomaly_at_epoch: Mean anomaly at t = 0 [rad]
    """
    name: str
    distance: float
    speed: float
    eccentricity: float = 0.0
    radius: float = 1.0
    mean_anomaly_at_epoch: float = 0.0

    def __post_init__(self):
        """Validate body parameters."""
        if not self.name:
            raise ValueError("Body name must not be empty")
        if not is_finite(self.distance) or self.distance <= 0:
            raise ValueError(f"Orbit distance must be positive. Got: {self.distance}")
        if not is_finite(self.speed):
            raise ValueError(f"Angular speed must be finite. Got: {self.speed}")
        if not is_finite(self.eccentricity) or not is_elliptic(self.eccentricity):
            raise ValueError(f"Eccentricity must be in range [0, 1). Got: {self.eccentricity}")
        if not is_finite(self.radius) or self.radius <= 0:
            raise ValueError(f"Body radius must be positive. Got: {self.radius}")
        if not is_finite(self.mean_anomaly_at_epoch):
            raise ValueError(f"Mean anomaly must be finite. Got: {self.mean_anomaly_at_epoch}")

    @property
    def period(self) -> float:
        """Orbital period [scene seconds]; infinite for a stationary body."""
        if self.speed == 0:
            return float('inf')
        return TWO_PI / abs(self.speed)

    def mean_anomaly(self, t: float) -> float:
        """Mean anomaly at scene time t [rad]."""
        return mean_anomaly_at_time(t, self.speed, self.mean_anomaly_at_epoch)

    def eccentric_anomaly(self, t: float, solver: Optional[KeplerSolver] = None) -> float:
        """Eccentric anomaly at scene time t [rad]."""
        solver = solver if solver is not None else KeplerSolver()
        return solver.solve(self.mean_anomaly(t), self.eccentricity)

    def true_anomaly(self, t: float, solver: Optional[KeplerSolver] = None) -> float:
        """True anomaly at scene time t, wrapped to [0, 2π) [rad]."""
        E = self.eccentric_anomaly(t, solver)
        return float(wrap_to_2pi(eccentric_to_true_anomaly(E, self.eccentricity)))

    def position(self, t: float, solver: Optional[KeplerSolver] = None) -> np.ndarray:
        """Scene position [x, 0, z] at scene time t."""
        E = self.eccentric_anomaly(t, solver)
        return scene_position(E, self.distance, self.eccentricity)


# Distances, speeds and display radii of the solar-system scene, paired with
# the planets' mean orbital eccentricities
SOLAR_SYSTEM_BODIES: List[OrbitingBody] = [
    OrbitingBody("Mercury", distance=4.0, speed=1.6, eccentricity=0.2056, radius=0.4),
    OrbitingBody("Venus", distance=6.0, speed=1.2, eccentricity=0.0068, radius=0.6),
    OrbitingBody("Earth", distance=8.0, speed=1.0, eccentricity=0.0167, radius=0.65),
    OrbitingBody("Mars", distance=10.0, speed=0.8, eccentricity=0.0934, radius=0.5),
    OrbitingBody("Jupiter", distance=14.0, speed=0.4, eccentricity=0.0489, radius=1.2),
    OrbitingBody("Saturn", distance=18.0, speed=0.3, eccentricity=0.0565, radius=1.0),
    OrbitingBody("Uranus", distance=22.0, speed=0.2, eccentricity=0.0463, radius=0.9),
    OrbitingBody("Neptune", distance=26.0, speed=0.15, eccentricity=0.0097, radius=0.85),
]


def create_solar_system(circular: bool = False) -> List[OrbitingBody]:
    """
    Fresh copy of the solar-system catalogue.

    Args:
        circular: Zero every eccentricity, giving uniform circular placement

    Returns:
        List of bodies ordered by distance
    """
    return [
        OrbitingBody(body.name, body.distance, body.speed,
                     0.0 if circular else body.eccentricity,
                     body.radius, body.mean_anomaly_at_epoch)
        for body in SOLAR_SYSTEM_BODIES
    ]


def frame_positions(bodies: Sequence[OrbitingBody], t: float,
                    solver: Optional[KeplerSolver] = None) -> Dict[str, np.ndarray]:
    """
    Place every body for one animation frame.

    All bodies are solved together in one batched Kepler call.

    Args:
        bodies: Bodies to place; names must be unique
        t: Scene time [s]
        solver: Configured solver (defaults to fixed 6-step mode)

    Returns:
        Mapping of body name to scene position [x, 0, z]
    """
    names = [body.name for body in bodies]
    if len(set(names)) != len(names):
        raise InvalidInput(f"Duplicate body names in frame: {names}")
    if not bodies:
        return {}

    solver = solver if solver is not None else KeplerSolver()

    M = np.array([body.mean_anomaly(t) for body in bodies])
    e = np.array([body.eccentricity for body in bodies])
    E = solver.solve_array(M, e)

    return {
        body.name: scene_position(E[k], body.distance, body.eccentricity)
        for k, body in enumerate(bodies)
    }
