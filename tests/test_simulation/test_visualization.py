"""
Tests for solver diagnostic plots.
"""

import pytest
import numpy as np
import matplotlib.pyplot as plt

from kepler_orbits.simulation.accuracy_study import AccuracyStudyConfig, run_accuracy_study
from kepler_orbits.simulation.bodies import OrbitingBody, create_solar_system
from kepler_orbits.simulation.visualization import SolverDiagnosticsVisualizer


@pytest.fixture
def visualizer():
    yield SolverDiagnosticsVisualizer(figsize=(6, 4))
    plt.close('all')


class TestSolverDiagnosticsVisualizer:

    def test_convergence_history_plot(self, visualizer):
        fig = visualizer.plot_convergence_history(1.0, [0.0, 0.5, 0.9],
                                                  max_iterations=6,
                                                  residual_threshold=1e-6)

        ax = fig.axes[0]
        assert len(ax.get_legend().get_texts()) == 4
        assert ax.get_yscale() == 'log'

    def test_residual_map(self, visualizer, tmp_path):
        config = AccuracyStudyConfig(eccentricities=np.linspace(0.0, 0.6, 4),
                                     mean_anomalies=np.linspace(-np.pi, np.pi, 9))
        save_path = tmp_path / "residual_map.png"

        fig = visualizer.plot_residual_map(run_accuracy_study(config), save_path=str(save_path))

        assert len(fig.axes) == 3  # two panels plus the colorbar
        assert save_path.exists()

    def test_orbit_tracks(self, visualizer):
        bodies = create_solar_system()[:3] + [OrbitingBody("Still", distance=2.0, speed=0.0)]

        fig = visualizer.plot_orbit_tracks(bodies, num_points=90)

        labels = [text.get_text() for text in fig.axes[0].get_legend().get_texts()]
        assert labels == ["Focus", "Mercury", "Venus", "Earth"]


if __name__ == "__main__":
    pytest.main([__file__])
