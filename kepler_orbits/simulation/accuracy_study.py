"""
Kepler Solver Accuracy Study

This module measures how closely the Newton-Raphson solver meets Kepler's
equation over a grid of eccentricities and mean anomalies, comparing each
estimate with a bracketed reference root from scipy. It is the tool used to
map where the fixed iteration budget stops being enough as e approaches 1.
"""

import warnings
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass, field

from scipy.optimize import brentq

from ..dynamics.kepler_solver import (PrecisionWarning, kepler_residual,
                                      solve_kepler_array, solve_kepler_equation,
                                      validate_kepler_inputs)
from ..utils.constants import (DEFAULT_KEPLER_ITERATIONS, DEFAULT_STUDY_ECCENTRICITIES,
                               DEFAULT_STUDY_MAX_ECCENTRICITY,
                               DEFAULT_STUDY_MEAN_ANOMALIES, PI,
                               ROOT_RESIDUAL_TOLERANCE)


def reference_eccentric_anomaly(mean_anomaly: float, eccentricity: float) -> float:
    """
    Reference root of Kepler's equation by Brent's method.

    The root satisfies |E - M| = e |sin E| <= e < 1, so [M - 1, M + 1] always
    brackets it.

    Args:
        mean_anomaly: Mean anomaly [rad]
        eccentricity: Orbital eccentricity, 0 <= e < 1

    Returns:
        Eccentric anomaly [rad]
    """
    validate_kepler_inputs(mean_anomaly, eccentricity)
    return brentq(kepler_residual, mean_anomaly - 1.0, mean_anomaly + 1.0,
                  args=(mean_anomaly, eccentricity), xtol=1e-14, maxiter=200)


def convergence_history(mean_anomaly: float, eccentricity: float,
                        max_iterations: int = DEFAULT_KEPLER_ITERATIONS) -> np.ndarray:
    """
    Absolute Kepler residual after each Newton-Raphson step.

    Entry 0 is the residual of the seed E0 = M, entry k the residual after
    k fixed-mode steps.

    Returns:
        Array of length max_iterations + 1 [rad]
    """
    history = [abs(float(kepler_residual(mean_anomaly, mean_anomaly, eccentricity)))]
    for k in range(1, max_iterations + 1):
        E = solve_kepler_equation(mean_anomaly, eccentricity, max_iterations=k)
        history.append(abs(float(kepler_residual(E, mean_anomaly, eccentricity))))
    return np.array(history)


@dataclass
class AccuracyStudyConfig:
    """Grid and solver settings for an accuracy study."""

    # Grid
    eccentricities: np.ndarray = field(default_factory=lambda: np.linspace(
        0.0, DEFAULT_STUDY_MAX_ECCENTRICITY, DEFAULT_STUDY_ECCENTRICITIES))
    mean_anomalies: np.ndarray = field(default_factory=lambda: np.linspace(
        -4 * PI, 4 * PI, DEFAULT_STUDY_MEAN_ANOMALIES))

    # Solver
    max_iterations: int = DEFAULT_KEPLER_ITERATIONS
    tolerance: Optional[float] = None

    # Acceptance
    residual_threshold: float = ROOT_RESIDUAL_TOLERANCE

    def __post_init__(self):
        """Validate study grid."""
        self.eccentricities = np.atleast_1d(np.asarray(self.eccentricities, dtype=float))
        self.mean_anomalies = np.atleast_1d(np.asarray(self.mean_anomalies, dtype=float))
        if self.eccentricities.ndim != 1 or self.mean_anomalies.ndim != 1:
            raise ValueError("Study grids must be one-dimensional")
        if self.residual_threshold <= 0:
            raise ValueError("Residual threshold must be positive")


@dataclass
class AccuracyStudyResult:
    """Residual and error grids from an accuracy study, shape (n_e, n_M)."""

    config: AccuracyStudyConfig
    eccentric_anomalies: np.ndarray
    residuals: np.ndarray
    errors: np.ndarray
    precision_warnings: int = 0

    @property
    def max_residual(self) -> float:
        return float(np.max(self.residuals))

    @property
    def mean_residual(self) -> float:
        return float(np.mean(self.residuals))

    @property
    def max_error(self) -> float:
        return float(np.max(self.errors))

    @property
    def failing_cells(self) -> int:
        """Grid cells whose residual exceeds the acceptance threshold."""
        return int(np.count_nonzero(self.residuals >= self.config.residual_threshold))

    @property
    def passed(self) -> bool:
        return self.failing_cells == 0

    def worst_case(self) -> Tuple[float, float]:
        """(eccentricity, mean anomaly) of the largest residual."""
        i, j = np.unravel_index(np.argmax(self.residuals), self.residuals.shape)
        return float(self.config.eccentricities[i]), float(self.config.mean_anomalies[j])

    def max_residual_by_eccentricity(self) -> np.ndarray:
        """Largest residual along each eccentricity row."""
        return np.max(self.residuals, axis=1)


def run_accuracy_study(config: Optional[AccuracyStudyConfig] = None) -> AccuracyStudyResult:
    """
    Solve Kepler's equation across the configured grid and score the result.

    Tolerance-mode PrecisionWarnings are counted instead of being re-emitted;
    any other warning raised while solving is passed on to the caller.

    Args:
        config: Study settings (defaults to create_default_study_config())

    Returns:
        AccuracyStudyResult
    """
    config = config if config is not None else create_default_study_config()

    e_grid, M_grid = np.meshgrid(config.eccentricities, config.mean_anomalies, indexing='ij')

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        E = solve_kepler_array(M_grid, e_grid, config.max_iterations, config.tolerance)

    precision_warnings = 0
    for w in caught:
        if issubclass(w.category, PrecisionWarning):
            precision_warnings += 1
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

    reference = np.vectorize(reference_eccentric_anomaly, otypes=[float])(M_grid, e_grid)

    return AccuracyStudyResult(
        config=config,
        eccentric_anomalies=E,
        residuals=np.abs(kepler_residual(E, M_grid, e_grid)),
        errors=np.abs(E - reference),
        precision_warnings=precision_warnings,
    )


def generate_accuracy_report(result: AccuracyStudyResult) -> str:
    """Plain-text summary of an accuracy study."""
    config = result.config
    mode = (f"tolerance {config.tolerance:.1e}" if config.tolerance
            else "fixed iterations")
    worst_e, worst_M = result.worst_case()

    report = f"""
Kepler Solver Accuracy Report
=============================

Solver Configuration:
- Iteration budget: {config.max_iterations}
- Mode: {mode}

Grid:
- Eccentricity: {config.eccentricities.min():.3f} .. {config.eccentricities.max():.3f} ({config.eccentricities.size} values)
- Mean anomaly: {config.mean_anomalies.min():.3f} .. {config.mean_anomalies.max():.3f} rad ({config.mean_anomalies.size} values)

Residual |E - e sin E - M|:
- Max:  {result.max_residual:.3e} rad
- Mean: {result.mean_residual:.3e} rad
- Worst case: e = {worst_e:.4f}, M = {worst_M:.4f} rad

Error vs. reference root:
- Max:  {result.max_error:.3e} rad

Acceptance (residual < {config.residual_threshold:.1e}):
- Failing cells: {result.failing_cells} of {result.residuals.size}
"""

    if result.precision_warnings:
        report += f"- Precision warnings: {result.precision_warnings}\n"

    return report


def create_default_study_config() -> AccuracyStudyConfig:
    """Default study: e in [0, 0.99], M in [-4π, 4π], fixed 6 steps."""
    return AccuracyStudyConfig()
