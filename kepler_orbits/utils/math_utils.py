"""
Mathematical Utilities for Orbital Mechanics

This module provides the angle handling and input checks shared by the
Kepler solver and the anomaly conversion helpers.
"""

import numpy as np
from typing import Union

from .constants import ECCENTRICITY_LIMIT, MIN_ECCENTRICITY, PI, TWO_PI

ArrayLike = Union[float, np.ndarray]


def normalize_angle(angle: ArrayLike, center: float = 0.0) -> ArrayLike:
    """
    Normalize angle to be within [center-π, center+π).

    Args:
        angle: Angle to normalize [rad]
        center: Center of the normalized range [rad]

    Returns:
        Normalized angle [rad]
    """
    normalized = angle - center
    normalized = normalized - TWO_PI * np.floor((normalized + PI) / TWO_PI)
    return normalized + center


def wrap_to_2pi(angle: ArrayLike) -> ArrayLike:
    """
    Wrap angle to [0, 2π) range.

    Args:
        angle: Input angle [rad]

    Returns:
        Wrapped angle [rad]
    """
    return angle - TWO_PI * np.floor(angle / TWO_PI)


def wrap_to_pi(angle: ArrayLike) -> ArrayLike:
    """
    Wrap angle to [-π, π) range.

    Args:
        angle: Input angle [rad]

    Returns:
        Wrapped angle [rad]
    """
    return normalize_angle(angle, 0.0)


def is_finite(value: ArrayLike) -> bool:
    """True when every element of value is a finite real number."""
    return bool(np.all(np.isfinite(value)))


def is_elliptic(eccentricity: ArrayLike) -> bool:
    """True when every eccentricity lies in the closed-ellipse range [0, 1)."""
    e = np.asarray(eccentricity, dtype=float)
    return bool(np.all((e >= MIN_ECCENTRICITY) & (e < ECCENTRICITY_LIMIT)))
