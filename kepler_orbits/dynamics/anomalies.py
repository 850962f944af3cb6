"""
Anomaly Conversions and Ellipse Placement

This module turns solver output into positions: mean anomaly from elapsed
time, eccentric/true anomaly conversions, orbital radius and the Cartesian
placement of a body on its ellipse with the attracting body at the focus.
"""

import numpy as np
from typing import Tuple

from ..utils.math_utils import ArrayLike, is_elliptic, is_finite
from .kepler_solver import DomainError, InvalidInput


def _check_eccentricity(eccentricity: ArrayLike) -> None:
    if not is_finite(eccentricity):
        raise InvalidInput(f"Eccentricity must be finite. Got: {eccentricity}")
    if not is_elliptic(eccentricity):
        raise DomainError(f"Eccentricity must be in range [0, 1). Got: {eccentricity}")


def _check_semi_major_axis(semi_major_axis: float) -> None:
    if not is_finite(semi_major_axis) or semi_major_axis <= 0:
        raise InvalidInput(f"Semi-major axis must be positive. Got: {semi_major_axis}")


def mean_anomaly_at_time(elapsed_time: ArrayLike, angular_rate: float,
                         mean_anomaly_at_epoch: float = 0.0) -> ArrayLike:
    """
    Mean anomaly after uniform angular motion.

    Args:
        elapsed_time: Time since epoch [s]
        angular_rate: Mean angular rate [rad/s]
        mean_anomaly_at_epoch: Mean anomaly at t = 0 [rad]

    Returns:
        Mean anomaly [rad], not wrapped
    """
    return mean_anomaly_at_epoch + angular_rate * elapsed_time


def eccentric_to_true_anomaly(eccentric_anomaly: ArrayLike, eccentricity: ArrayLike) -> ArrayLike:
    """
    Convert eccentric anomaly to true anomaly.

    Args:
        eccentric_anomaly: Eccentric anomaly [rad]
        eccentricity: Orbital eccentricity [-]

    Returns:
        True anomaly [rad] in (-π, π]
    """
    _check_eccentricity(eccentricity)
    E = eccentric_anomaly
    e = eccentricity

    sin_f = np.sqrt(1 - e**2) * np.sin(E)
    cos_f = np.cos(E) - e
    return np.arctan2(sin_f, cos_f)


def true_to_eccentric_anomaly(true_anomaly: ArrayLike, eccentricity: ArrayLike) -> ArrayLike:
    """
    Convert true anomaly to eccentric anomaly.

    Args:
        true_anomaly: True anomaly [rad]
        eccentricity: Orbital eccentricity [-]

    Returns:
        Eccentric anomaly [rad] in (-π, π]
    """
    _check_eccentricity(eccentricity)
    f = true_anomaly
    e = eccentricity

    cos_E = (e + np.cos(f)) / (1 + e * np.cos(f))
    sin_E = np.sqrt(1 - e**2) * np.sin(f) / (1 + e * np.cos(f))
    return np.arctan2(sin_E, cos_E)


def orbital_radius(eccentric_anomaly: ArrayLike, semi_major_axis: float,
                   eccentricity: ArrayLike) -> ArrayLike:
    """Distance from the focus, r = a (1 - e cos E)."""
    _check_semi_major_axis(semi_major_axis)
    _check_eccentricity(eccentricity)
    return semi_major_axis * (1 - eccentricity * np.cos(eccentric_anomaly))


def ellipse_position(eccentric_anomaly: ArrayLike, semi_major_axis: float,
                     eccentricity: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
    """
    Position in the orbital plane with the focus at the origin.

    x = a (cos E - e), y = b sin E with b = a sqrt(1 - e^2); periapsis lies
    on the +x axis.

    Args:
        eccentric_anomaly: Eccentric anomaly [rad]
        semi_major_axis: Semi-major axis a (> 0)
        eccentricity: Orbital eccentricity [-]

    Returns:
        Tuple of (x, y) in the units of a
    """
    _check_semi_major_axis(semi_major_axis)
    _check_eccentricity(eccentricity)

    a = semi_major_axis
    b = a * np.sqrt(1 - eccentricity**2)

    x = a * (np.cos(eccentric_anomaly) - eccentricity)
    y = b * np.sin(eccentric_anomaly)
    return x, y


def scene_position(eccentric_anomaly: ArrayLike, semi_major_axis: float,
                   eccentricity: float) -> np.ndarray:
    """
    Position as a scene 3-vector with the orbit lying flat in the XZ plane.

    The in-plane x coordinate maps to scene X and y to scene Z, so a circular
    orbit reproduces (d cos t, 0, d sin t).

    Returns:
        Position vector [x, 0, z], or an array of shape (..., 3) for an
        array of eccentric anomalies
    """
    x, y = ellipse_position(eccentric_anomaly, semi_major_axis, eccentricity)
    x, y = np.asarray(x, dtype=float), np.asarray(y, dtype=float)
    return np.stack([x, np.zeros_like(x), y], axis=-1)
