"""
Simulation Support Module

This module provides per-frame placement of orbiting bodies, solver
accuracy studies and matplotlib diagnostics.
"""

from .bodies import (
    OrbitingBody,
    SOLAR_SYSTEM_BODIES,
    create_solar_system,
    frame_positions
)

from .accuracy_study import (
    AccuracyStudyConfig,
    AccuracyStudyResult,
    reference_eccentric_anomaly,
    convergence_history,
    run_accuracy_study,
    generate_accuracy_report,
    create_default_study_config
)

from .visualization import SolverDiagnosticsVisualizer

__all__ = [
    # Bodies
    'OrbitingBody',
    'SOLAR_SYSTEM_BODIES',
    'create_solar_system',
    'frame_positions',

    # Accuracy study
    'AccuracyStudyConfig',
    'AccuracyStudyResult',
    'reference_eccentric_anomaly',
    'convergence_history',
    'run_accuracy_study',
    'generate_accuracy_report',
    'create_default_study_config',

    # Visualization
    'SolverDiagnosticsVisualizer'
]
