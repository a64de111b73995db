"""Visualization layer: occupancy heatmaps."""

from railgrid.viz.render import render_occupancy

__all__ = [
    "render_occupancy",
]
