"""Strategy comparison across forest sizes.

Left: success ratio per node count. Right: mean shots to capture with a
one standard deviation band (captures only).
"""

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from monkeyhunt.benchmark.runner import BenchmarkResult
from monkeyhunt.visualization.style import apply_style, save_figure, strategy_color


def plot_sweep(results: Sequence[BenchmarkResult]) -> plt.Figure:
    """Plot success ratio and mean shots against the number of trees.

    Args:
        results: One BenchmarkResult per node count.

    Returns:
        The matplotlib Figure containing both subplots.
    """
    ordered = sorted(results, key=lambda r: r.n_trees)
    n_values = np.array([r.n_trees for r in ordered])
    names = sorted({name for r in ordered for name in r.statistics})

    fig, (ax_ratio, ax_shots) = plt.subplots(1, 2, figsize=(14, 5))

    for name in names:
        color = strategy_color(name)
        stats = [r.statistics.get(name) for r in ordered]
        ratio = np.array([s.success_ratio if s else np.nan for s in stats])
        mean = np.array(
            [s.mean if s and s.mean is not None else np.nan for s in stats]
        )
        std = np.array(
            [s.std if s and s.std is not None else np.nan for s in stats]
        )

        ax_ratio.plot(n_values, ratio, color=color, marker="o", markersize=4, label=name)
        ax_shots.plot(n_values, mean, color=color, marker="o", markersize=4, label=name)
        ax_shots.fill_between(n_values, mean - std, mean + std, color=color, alpha=0.2)

    ax_ratio.set_xlabel("Number of trees")
    ax_ratio.set_ylabel("Success ratio")
    ax_ratio.set_title("Capture rate")
    ax_ratio.set_ylim(0, 1.05)
    ax_ratio.legend()

    ax_shots.set_xlabel("Number of trees")
    ax_shots.set_ylabel("Shots until capture")
    ax_shots.set_title("Mean shots (captures only, ±1 std)")
    ax_shots.legend()

    fig.tight_layout()
    return fig


def render_sweep(
    results: Sequence[BenchmarkResult], output_dir: str | Path
) -> tuple[Path, Path]:
    """Style, plot and save the sweep figure under output_dir/figures/."""
    apply_style()
    fig = plot_sweep(results)
    return save_figure(fig, Path(output_dir) / "figures", "strategy_comparison")
