"""Tests for evo_creatures.viewer (headless)."""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from evo_creatures.fitness import CENTER_SQUARE  # noqa: E402
from evo_creatures.runner import GenerationResult, GenerationStatus  # noqa: E402
from evo_creatures.viewer import plot_survival, render_generation  # noqa: E402
from evo_creatures.world import WorldConfig  # noqa: E402


def make_result():
    positions = np.array([[10, 10], [60, 60], [100, 5]])
    mask = np.array([False, True, False])
    return GenerationResult(2, GenerationStatus.COMPLETE, positions, mask, None, 1000)


class TestViewer:
    """Frames are drawn from results without touching the simulation."""

    def test_render_generation(self):
        fig = render_generation(make_result(), WorldConfig(128, 128), predicate_region=CENTER_SQUARE)
        ax = fig.axes[0]
        assert "1/3 survived" in ax.get_title()
        assert len(ax.patches) == 1
        assert len(ax.collections) == 2
        plt.close(fig)

    def test_render_into_existing_axes(self):
        fig, ax = plt.subplots()
        assert render_generation(make_result(), WorldConfig(128, 128), ax=ax) is fig
        plt.close(fig)

    def test_plot_survival(self):
        fig = plot_survival([(0, 10), (1, 30), (2, 55)], population=100)
        line = fig.axes[0].lines[0]
        assert list(line.get_ydata()) == [10, 30, 55]
        plt.close(fig)
