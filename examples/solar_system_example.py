"""
Solar System Example: Per-Frame Placement and Solver Accuracy

This example places the eight planets for a few animation frames, runs an
accuracy study of the fixed-iteration solver and saves diagnostic plots.
"""

from kepler_orbits.simulation.accuracy_study import (create_default_study_config,
                                                     generate_accuracy_report,
                                                     run_accuracy_study)
from kepler_orbits.simulation.bodies import create_solar_system, frame_positions
from kepler_orbits.simulation.visualization import SolverDiagnosticsVisualizer


def main():
    """Main example function."""
    print("=== Kepler Orbits - Solar System Example ===\n")

    bodies = create_solar_system()

    # Place every planet for a handful of frames (60 frames per scene second)
    print("1. Planet positions:")
    for frame in [0, 60, 600]:
        t = frame / 60.0
        positions = frame_positions(bodies, t)
        print(f"  Frame {frame} (t = {t:.1f} s):")
        for name, position in positions.items():
            print(f"    {name:8s} x = {position[0]:7.3f}, z = {position[2]:7.3f}")

    # Accuracy of the fixed 6-step solver
    print("\n2. Accuracy study:")
    result = run_accuracy_study(create_default_study_config())
    print(generate_accuracy_report(result))

    # Diagnostic plots
    print("3. Diagnostic plots:")
    visualizer = SolverDiagnosticsVisualizer()
    visualizer.plot_convergence_history(0.5, [0.1, 0.5, 0.8, 0.95], max_iterations=10,
                                        residual_threshold=1e-6,
                                        save_path="kepler_convergence.png")
    visualizer.plot_residual_map(result, save_path="kepler_residual_map.png")
    visualizer.plot_orbit_tracks(bodies[:4], save_path="inner_planet_tracks.png")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
