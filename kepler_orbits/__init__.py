"""
Kepler Orbits

Newton-Raphson solver for Kepler's equation with the anomaly conversions and
per-frame body placement used to animate bodies on elliptic orbits.
"""

__version__ = "1.0.0"

from .dynamics.kepler_solver import (KeplerSolver, KeplerSolverConfig, KeplerSolution,
                                     DomainError, InvalidInput, KeplerSolverError,
                                     PrecisionWarning, solve_kepler_equation,
                                     solve_kepler_detailed, solve_kepler_array)
from .utils.constants import *
