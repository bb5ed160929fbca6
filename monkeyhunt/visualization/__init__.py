"""Static figures comparing hunter strategies."""

from monkeyhunt.visualization.style import apply_style, save_figure
from monkeyhunt.visualization.sweep import plot_sweep, render_sweep

__all__ = [
    "apply_style",
    "plot_sweep",
    "render_sweep",
    "save_figure",
]
