"""
Mathematical Constants and Solver Defaults

This module contains the constants and default numerical settings used
throughout the Kepler solver and the orbit placement helpers.
"""

import numpy as np

# Mathematical Constants
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG_TO_RAD = np.pi / 180.0
RAD_TO_DEG = 180.0 / np.pi

# Kepler Solver Defaults
DEFAULT_KEPLER_ITERATIONS = 6      # Fixed Newton-Raphson steps per solve
DEFAULT_KEPLER_TOLERANCE = 1e-12   # Step tolerance for tolerance mode [rad]
MAX_KEPLER_ITERATIONS = 100        # Iteration cap used by tolerance-mode helpers

# Eccentricity Domain (closed ellipse only)
MIN_ECCENTRICITY = 0.0
ECCENTRICITY_LIMIT = 1.0           # Exclusive upper bound

# Eccentricity above which fixed-iteration mode is not guaranteed to meet
# ROOT_RESIDUAL_TOLERANCE for every mean anomaly
HIGH_ECCENTRICITY_THRESHOLD = 0.8

# Numerical Tolerances
ROOT_RESIDUAL_TOLERANCE = 1e-6     # |E - e sin E - M| accepted as a root [rad]

# Accuracy Study Grid
DEFAULT_STUDY_ECCENTRICITIES = 50
DEFAULT_STUDY_MEAN_ANOMALIES = 181
DEFAULT_STUDY_MAX_ECCENTRICITY = 0.99
