"""
Kepler Equation Solver

This module solves Kepler's equation for elliptic orbits,

    E - e sin(E) = M,

for the eccentric anomaly E given the mean anomaly M and the eccentricity e,
using Newton-Raphson iteration on f(E) = E - e sin(E) - M seeded at E0 = M.

Two modes are supported:

* Fixed-iteration mode (default, no tolerance): exactly ``max_iterations``
  steps are taken, so every call costs the same number of trig evaluations.
  This is the mode for per-frame animation work. Six steps reach machine
  precision for moderate eccentricities, but the error bound loosens as
  e approaches 1 and the fixed budget is then not guaranteed to reach a
  tight residual. That is an accepted limitation of the mode.
* Tolerance mode (``tolerance > 0``): iteration stops as soon as
  |E_n+1 - E_n| < tolerance. Since |E - M| = e |sin E| <= e, the root lies
  in [M - e, M + e]; the iterate is kept inside that bracket, which shrinks
  with the sign of f at each iterate, and a step is replaced by bisection
  whenever Newton would leave it or fails to halve the previous step. This
  keeps the mode reliable up to e close to 1, where bare Newton from E0 = M
  can wander between branches. If the budget runs out first the iterate
  with the smallest residual is returned and a ``PrecisionWarning`` is
  issued.

For 0 <= e < 1 the derivative 1 - e cos(E) is bounded below by 1 - e > 0,
so the left-hand side is strictly increasing, the root is unique and the
Newton step never divides by zero. Inputs are therefore validated before
iterating rather than inside the loop.
"""

import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from ..utils.constants import (DEFAULT_KEPLER_ITERATIONS,
                               DEFAULT_KEPLER_TOLERANCE,
                               MAX_KEPLER_ITERATIONS)
from ..utils.math_utils import is_elliptic, is_finite

ArrayLike = Union[float, np.ndarray]


class KeplerSolverError(ValueError):
    """Base class for Kepler solver input errors."""


class DomainError(KeplerSolverError):
    """Eccentricity outside the elliptic range [0, 1)."""


class InvalidInput(KeplerSolverError):
    """Non-finite anomaly/eccentricity or an invalid iteration setting."""


class PrecisionWarning(UserWarning):
    """Tolerance mode ran out of iterations before meeting its tolerance."""


@dataclass(frozen=True)
class KeplerSolverConfig:
    """
    Iteration settings for the Kepler solver.

    Attributes:
        max_iterations: Newton-Raphson step budget (>= 1)
        tolerance: Early-exit step tolerance [rad]; None or 0 selects
            fixed-iteration mode
        strict: Validate eccentricity and finiteness before iterating.
            False reproduces the bare iteration with no domain checks.
    """
    max_iterations: int = DEFAULT_KEPLER_ITERATIONS
    tolerance: Optional[float] = None
    strict: bool = True

    def __post_init__(self):
        """Validate iteration settings."""
        _validate_budget(self.max_iterations, self.tolerance)

    @property
    def fixed_iterations(self) -> bool:
        """True when every solve runs exactly max_iterations steps."""
        return not self.tolerance


@dataclass(frozen=True)
class KeplerSolution:
    """
    Outcome of a single Kepler solve.

    Attributes:
        eccentric_anomaly: Final estimate of E [rad]
        mean_anomaly: Mean anomaly the solve was run for [rad]
        eccentricity: Eccentricity the solve was run for [-]
        iterations: Newton-Raphson steps actually taken
        converged: False only when tolerance mode exhausted its budget
        last_step: Magnitude of the final Newton step [rad]
    """
    eccentric_anomaly: float
    mean_anomaly: float
    eccentricity: float
    iterations: int
    converged: bool
    last_step: float

    @property
    def residual(self) -> float:
        """Kepler equation residual E - e sin(E) - M [rad]."""
        return float(kepler_residual(self.eccentric_anomaly,
                                     self.mean_anomaly, self.eccentricity))


def _validate_budget(max_iterations: int, tolerance: Optional[float]) -> None:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer)):
        raise InvalidInput(f"max_iterations must be an integer. Got: {max_iterations!r}")
    if max_iterations < 1:
        raise InvalidInput(f"max_iterations must be >= 1. Got: {max_iterations}")
    if tolerance is not None:
        if not is_finite(tolerance) or tolerance < 0:
            raise InvalidInput(f"tolerance must be a finite value >= 0. Got: {tolerance}")


def validate_kepler_inputs(mean_anomaly: ArrayLike, eccentricity: ArrayLike) -> None:
    """Raise DomainError or InvalidInput for inputs outside the elliptic domain."""
    if not is_finite(eccentricity):
        raise InvalidInput(f"Eccentricity must be finite. Got: {eccentricity}")
    if not is_elliptic(eccentricity):
        raise DomainError(f"Eccentricity must be in range [0, 1). Got: {eccentricity}")
    if not is_finite(mean_anomaly):
        raise InvalidInput(f"Mean anomaly must be finite. Got: {mean_anomaly}")


def _warn_not_converged(max_iterations: int, tolerance: float, last_step: float) -> None:
    warnings.warn(
        f"Kepler solver reached {max_iterations} iterations without meeting "
        f"tolerance {tolerance:.1e} (last step {last_step:.3e} rad); "
        f"returning best estimate",
        PrecisionWarning,
        stacklevel=3,
    )


def kepler_residual(eccentric_anomaly: ArrayLike, mean_anomaly: ArrayLike,
                    eccentricity: ArrayLike) -> ArrayLike:
    """
    Evaluate Kepler's equation residual f(E) = E - e sin(E) - M.

    Args:
        eccentric_anomaly: Eccentric anomaly [rad]
        mean_anomaly: Mean anomaly [rad]
        eccentricity: Orbital eccentricity [-]

    Returns:
        Residual [rad]; zero at the exact root
    """
    return eccentric_anomaly - eccentricity * np.sin(eccentric_anomaly) - mean_anomaly


def _newton_raphson(mean_anomaly: float, eccentricity: float, max_iterations: int,
                    tolerance: Optional[float]) -> Tuple[float, int, bool, float]:
    E = mean_anomaly
    last_step = 0.0

    if not tolerance:
        for _ in range(max_iterations):
            step = (E - eccentricity * np.sin(E) - mean_anomaly) / (1 - eccentricity * np.cos(E))
            E = E - step
            last_step = abs(step)
        return float(E), max_iterations, True, float(last_step)

    # |E - M| = |e sin E| <= |e|, so the root always lies in this bracket
    lower = mean_anomaly - abs(eccentricity)
    upper = mean_anomaly + abs(eccentricity)
    previous_step = upper - lower
    best_E, best_residual = E, abs(kepler_residual(E, mean_anomaly, eccentricity))

    for iteration in range(1, max_iterations + 1):
        f = kepler_residual(E, mean_anomaly, eccentricity)
        if f < 0:
            lower = E
        elif f > 0:
            upper = E

        candidate = E - f / (1 - eccentricity * np.cos(E))
        if not lower <= candidate <= upper or abs(candidate - E) > 0.5 * previous_step:
            # Bisect when Newton leaves the bracket or stops halving its step
            candidate = 0.5 * (lower + upper)

        last_step = previous_step = abs(candidate - E)
        E = candidate

        if last_step < tolerance:
            return float(E), iteration, True, float(last_step)

        residual = abs(kepler_residual(E, mean_anomaly, eccentricity))
        if residual < best_residual:
            best_E, best_residual = E, residual

    return float(best_E), max_iterations, False, float(last_step)


def _solve_scalar(mean_anomaly, eccentricity, max_iterations, tolerance, strict):
    _validate_budget(max_iterations, tolerance)
    if strict:
        validate_kepler_inputs(mean_anomaly, eccentricity)
    return _newton_raphson(mean_anomaly, eccentricity, max_iterations, tolerance)


def solve_kepler_detailed(mean_anomaly: float, eccentricity: float,
                          max_iterations: int = DEFAULT_KEPLER_ITERATIONS,
                          tolerance: Optional[float] = None,
                          strict: bool = True) -> KeplerSolution:
    """
    Solve Kepler's equation and report how the iteration went.

    Args:
        mean_anomaly: Mean anomaly [rad], any finite value (not wrapped)
        eccentricity: Orbital eccentricity, 0 <= e < 1
        max_iterations: Newton-Raphson step budget (>= 1)
        tolerance: Early-exit step tolerance [rad]; None or 0 runs exactly
            max_iterations steps
        strict: Reject out-of-domain or non-finite inputs before iterating

    Returns:
        KeplerSolution with the eccentric anomaly and iteration details

    Raises:
        DomainError: eccentricity outside [0, 1) (strict mode)
        InvalidInput: non-finite inputs (strict mode) or bad iteration settings

    Warns:
        PrecisionWarning: tolerance mode exhausted max_iterations
    """
    E, iterations, converged, last_step = _solve_scalar(
        mean_anomaly, eccentricity, max_iterations, tolerance, strict)

    if not converged:
        _warn_not_converged(max_iterations, tolerance, last_step)

    return KeplerSolution(
        eccentric_anomaly=E,
        mean_anomaly=float(mean_anomaly),
        eccentricity=float(eccentricity),
        iterations=iterations,
        converged=converged,
        last_step=last_step,
    )


def solve_kepler_equation(mean_anomaly: float, eccentricity: float,
                          max_iterations: int = DEFAULT_KEPLER_ITERATIONS,
                          tolerance: Optional[float] = None,
                          strict: bool = True) -> float:
    """
    Solve Kepler's equation for eccentric anomaly using Newton-Raphson method.

    The returned angle is on the same 2π branch as the mean anomaly; no
    wrapping is applied.

    Args:
        mean_anomaly: Mean anomaly [rad]
        eccentricity: Orbital eccentricity, 0 <= e < 1
        max_iterations: Newton-Raphson step budget (>= 1)
        tolerance: Early-exit step tolerance [rad]; None or 0 selects
            fixed-iteration mode
        strict: Reject out-of-domain or non-finite inputs before iterating

    Returns:
        Eccentric anomaly [rad]
    """
    E, _, converged, last_step = _solve_scalar(mean_anomaly, eccentricity,
                                               max_iterations, tolerance, strict)
    if not converged:
        _warn_not_converged(max_iterations, tolerance, last_step)
    return E


def solve_kepler_array(mean_anomaly: ArrayLike, eccentricity: ArrayLike,
                       max_iterations: int = DEFAULT_KEPLER_ITERATIONS,
                       tolerance: Optional[float] = None,
                       strict: bool = True) -> np.ndarray:
    """
    Solve Kepler's equation element-wise for many bodies at once.

    Mean anomaly and eccentricity are broadcast against each other, so a
    scalar eccentricity may be paired with an array of mean anomalies. In
    tolerance mode each element is frozen once its step falls below the
    tolerance, and the batch stops when every element is frozen.

    Args:
        mean_anomaly: Mean anomalies [rad]
        eccentricity: Eccentricities, each 0 <= e < 1
        max_iterations: Newton-Raphson step budget (>= 1)
        tolerance: Early-exit step tolerance [rad]; None or 0 selects
            fixed-iteration mode
        strict: Reject out-of-domain or non-finite inputs before iterating

    Returns:
        Eccentric anomalies [rad] with the broadcast shape of the inputs
    """
    _validate_budget(max_iterations, tolerance)

    M = np.asarray(mean_anomaly, dtype=float)
    e = np.asarray(eccentricity, dtype=float)
    try:
        M, e = np.broadcast_arrays(M, e)
    except ValueError as exc:
        raise InvalidInput(
            f"Mean anomaly shape {M.shape} does not broadcast with eccentricity shape {e.shape}"
        ) from exc

    if strict:
        validate_kepler_inputs(M, e)

    E = M.copy()

    if not tolerance:
        for _ in range(max_iterations):
            E = E - (E - e * np.sin(E) - M) / (1 - e * np.cos(E))
        return E

    lower = M - np.abs(e)
    upper = M + np.abs(e)
    previous_step = upper - lower
    step = np.zeros_like(E)
    done = np.zeros(E.shape, dtype=bool)
    f = kepler_residual(E, M, e)
    best_E, best_residual = E.copy(), np.abs(f)

    for _ in range(max_iterations):
        lower = np.where(f < 0, E, lower)
        upper = np.where(f > 0, E, upper)

        candidate = E - f / (1 - e * np.cos(E))
        inside = (candidate >= lower) & (candidate <= upper)
        halving = np.abs(candidate - E) <= 0.5 * previous_step
        candidate = np.where(inside & halving, candidate, 0.5 * (lower + upper))
        # Converged elements are frozen
        candidate = np.where(done, E, candidate)

        step = previous_step = np.abs(candidate - E)
        E = candidate
        done |= step < tolerance

        if np.all(done):
            return E

        f = kepler_residual(E, M, e)
        improved = np.abs(f) < best_residual
        best_E = np.where(improved, E, best_E)
        best_residual = np.where(improved, np.abs(f), best_residual)

    last_step = float(np.max(step)) if step.size else 0.0
    _warn_not_converged(max_iterations, tolerance, last_step)
    return np.where(done, E, best_E)


class KeplerSolver:
    """
    Configured Kepler solver.

    Holds only an immutable KeplerSolverConfig, so one instance can be
    shared between any number of callers and threads.
    """

    def __init__(self, config: Optional[KeplerSolverConfig] = None):
        """
        Initialize solver.

        Args:
            config: Iteration settings (defaults to fixed 6-step mode)
        """
        self.config = config if config is not None else create_default_solver_config()

    def __repr__(self) -> str:
        return f"KeplerSolver({self.config!r})"

    def solve(self, mean_anomaly: float, eccentricity: float) -> float:
        """Eccentric anomaly [rad] for one body."""
        return solve_kepler_equation(mean_anomaly, eccentricity,
                                     self.config.max_iterations,
                                     self.config.tolerance,
                                     self.config.strict)

    def solve_detailed(self, mean_anomaly: float, eccentricity: float) -> KeplerSolution:
        """Eccentric anomaly with iteration details for one body."""
        return solve_kepler_detailed(mean_anomaly, eccentricity,
                                     self.config.max_iterations,
                                     self.config.tolerance,
                                     self.config.strict)

    def solve_array(self, mean_anomaly: ArrayLike, eccentricity: ArrayLike) -> np.ndarray:
        """Eccentric anomalies [rad] for a batch of bodies."""
        return solve_kepler_array(mean_anomaly, eccentricity,
                                  self.config.max_iterations,
                                  self.config.tolerance,
                                  self.config.strict)


def create_default_solver_config() -> KeplerSolverConfig:
    """Fixed-iteration configuration for bounded per-frame cost."""
    return KeplerSolverConfig(max_iterations=DEFAULT_KEPLER_ITERATIONS)


def create_precise_solver_config() -> KeplerSolverConfig:
    """Tolerance-mode configuration for offline, precision-first work."""
    return KeplerSolverConfig(max_iterations=MAX_KEPLER_ITERATIONS,
                              tolerance=DEFAULT_KEPLER_TOLERANCE)
