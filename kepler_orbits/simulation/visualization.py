"""
Solver Diagnostic Plots

This module draws matplotlib diagnostics for the Kepler solver: residual
decay per Newton-Raphson step, residual maps from an accuracy study and
top-down orbit tracks of placed bodies.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Sequence, Tuple

from ..dynamics.kepler_solver import KeplerSolver
from ..utils.constants import DEFAULT_KEPLER_ITERATIONS
from .accuracy_study import AccuracyStudyResult, convergence_history
from .bodies import OrbitingBody

# Floor for log-scale plots; exact roots have zero residual
RESIDUAL_FLOOR = 1e-18


class SolverDiagnosticsVisualizer:
    """Matplotlib diagnostics for solver accuracy and body placement."""

    def __init__(self, figsize: Tuple[int, int] = (12, 8)):
        """Initialize visualizer."""
        self.figsize = figsize

    def plot_convergence_history(self,
                                 mean_anomaly: float,
                                 eccentricities: Sequence[float],
                                 max_iterations: int = DEFAULT_KEPLER_ITERATIONS,
                                 residual_threshold: Optional[float] = None,
                                 save_path: Optional[str] = None) -> plt.Figure:
        """Plot |residual| against iteration count for several eccentricities."""

        fig, ax = plt.subplots(figsize=self.figsize)
        iterations = np.arange(max_iterations + 1)

        for e in eccentricities:
            history = np.maximum(convergence_history(mean_anomaly, e, max_iterations),
                                 RESIDUAL_FLOOR)
            ax.semilogy(iterations, history, 'o-', label=f'e = {e:.2f}')

        if residual_threshold is not None:
            ax.axhline(residual_threshold, color='red', linestyle='--', label='Threshold')

        ax.set_xlabel('Newton-Raphson iteration')
        ax.set_ylabel('|E - e sin E - M| [rad]')
        ax.set_title(f'Kepler Solver Convergence (M = {mean_anomaly:.3f} rad)')
        ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Convergence plot saved to {save_path}")

        return fig

    def plot_residual_map(self,
                          result: AccuracyStudyResult,
                          save_path: Optional[str] = None) -> plt.Figure:
        """Plot log10 residual over the (mean anomaly, eccentricity) grid."""

        config = result.config
        fig, axes = plt.subplots(1, 2, figsize=self.figsize)
        fig.suptitle(f'Kepler Solver Accuracy ({config.max_iterations} iterations)',
                     fontsize=14)

        log_residuals = np.log10(np.maximum(result.residuals, RESIDUAL_FLOOR))
        mesh = axes[0].pcolormesh(config.mean_anomalies, config.eccentricities,
                                  log_residuals, shading='auto', cmap='viridis')
        fig.colorbar(mesh, ax=axes[0], label='log10 |residual|')
        axes[0].set_xlabel('Mean anomaly [rad]')
        axes[0].set_ylabel('Eccentricity [-]')
        axes[0].set_title('Residual Map')

        axes[1].semilogy(config.eccentricities,
                         np.maximum(result.max_residual_by_eccentricity(), RESIDUAL_FLOOR),
                         'k-', linewidth=2)
        axes[1].axhline(config.residual_threshold, color='red', linestyle='--',
                        label='Threshold')
        axes[1].set_xlabel('Eccentricity [-]')
        axes[1].set_ylabel('Max |residual| [rad]')
        axes[1].set_title('Worst Residual per Eccentricity')
        axes[1].legend()
        axes[1].grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Residual map saved to {save_path}")

        return fig

    def plot_orbit_tracks(self,
                          bodies: Sequence[OrbitingBody],
                          num_points: int = 360,
                          solver: Optional[KeplerSolver] = None,
                          save_path: Optional[str] = None) -> plt.Figure:
        """Plot one full period of every body, seen from above the XZ plane."""

        fig, ax = plt.subplots(figsize=self.figsize)
        solver = solver if solver is not None else KeplerSolver()

        ax.plot(0.0, 0.0, '*', color='orange', markersize=15, label='Focus')

        for body in bodies:
            if body.speed == 0:
                continue
            times = np.linspace(0.0, body.period, num_points)
            track = np.array([body.position(t, solver) for t in times])
            ax.plot(track[:, 0], track[:, 2], '-', linewidth=1, label=body.name)

        ax.set_xlabel('X [scene units]')
        ax.set_ylabel('Z [scene units]')
        ax.set_title('Orbit Tracks')
        ax.set_aspect('equal')
        ax.legend(loc='upper right', fontsize='small')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Orbit tracks saved to {save_path}")

        return fig
