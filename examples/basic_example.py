"""
Basic Example: Solving Kepler's Equation

This example demonstrates the basic usage of the Kepler solver, including
fixed-iteration and tolerance modes, input rejection and the precision
warning issued for near-parabolic orbits.
"""

import warnings

import numpy as np

from kepler_orbits.dynamics.kepler_solver import (DomainError, InvalidInput,
                                                  KeplerSolver, PrecisionWarning,
                                                  create_precise_solver_config,
                                                  solve_kepler_detailed,
                                                  solve_kepler_equation)
from kepler_orbits.dynamics.anomalies import (eccentric_to_true_anomaly,
                                              ellipse_position)


def main():
    """Main example function."""
    print("=== Kepler Orbits - Basic Example ===\n")

    # Single solve in the default fixed-iteration mode
    print("1. Fixed-iteration solve (6 Newton-Raphson steps):")
    M, e = 1.0, 0.1
    E = solve_kepler_equation(M, e)
    print(f"  M = {M:.4f} rad, e = {e:.2f}")
    print(f"  E = {E:.10f} rad")
    print(f"  Residual: {E - e * np.sin(E) - M:.2e} rad")

    # Degenerate cases
    print("\n2. Degenerate cases:")
    print(f"  Circular orbit (e = 0): E(2.5) = {solve_kepler_equation(2.5, 0.0):.4f} rad")
    print(f"  Origin (M = 0, e = 0.5): E = {solve_kepler_equation(0.0, 0.5):.4f} rad")

    # Tolerance mode
    print("\n3. Tolerance mode:")
    for e in [0.1, 0.5, 0.9]:
        solution = solve_kepler_detailed(2.0, e, max_iterations=50, tolerance=1e-12)
        print(f"  e = {e:.1f}: E = {solution.eccentric_anomaly:.10f} rad "
              f"after {solution.iterations} iterations")

    # Precision warning
    print("\n4. Exhausted tolerance budget:")
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", PrecisionWarning)
        solution = solve_kepler_detailed(0.1, 0.99, max_iterations=3, tolerance=1e-12)
    print(f"  Converged: {solution.converged}, best estimate E = {solution.eccentric_anomaly:.6f} rad")
    for w in caught:
        print(f"  Warning: {w.message}")

    # Input rejection
    print("\n5. Rejected inputs:")
    for M, e in [(1.0, 1.0), (1.0, -0.1), (float('nan'), 0.5)]:
        try:
            solve_kepler_equation(M, e)
        except (DomainError, InvalidInput) as exc:
            print(f"  {type(exc).__name__}: {exc}")

    # Position on the ellipse
    print("\n6. Position on a 10-unit ellipse (e = 0.3):")
    solver = KeplerSolver(create_precise_solver_config())
    for M_deg in [0, 90, 180, 270]:
        E = solver.solve(np.radians(M_deg), 0.3)
        x, y = ellipse_position(E, 10.0, 0.3)
        f = eccentric_to_true_anomaly(E, 0.3)
        print(f"  M = {M_deg:3d}°: E = {np.degrees(E):7.2f}°, f = {np.degrees(f):7.2f}°, "
              f"(x, y) = ({x:6.2f}, {y:6.2f})")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
