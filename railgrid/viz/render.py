"""Matplotlib rendering of occupancy grids."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from railgrid.domain.grid import OccupancyGrid
from railgrid.io.paths import resolve_within_base

FREE_CELL_COLOR = "#F0F0F0"
OCCUPIED_CELL_COLOR = "#2196F3"
GRID_LINE_COLOR = "#CCCCCC"


def render_occupancy(
    grid: OccupancyGrid,
    output_path: Path,
    title: str | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Draw one seat x segment panel per day and save the figure.

    When *base_dir* is given, *output_path* must resolve inside it.
    """
    output_path = Path(output_path)
    if base_dir is not None:
        output_path = resolve_within_base(output_path, Path(base_dir))
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmap = ListedColormap([FREE_CELL_COLOR, OCCUPIED_CELL_COLOR])
    fig, axes = plt.subplots(
        1,
        grid.days,
        figsize=(1.2 + 0.6 * grid.segments * grid.days, 0.8 + 0.3 * grid.seats),
        squeeze=False,
    )
    cells = grid.cells
    for day, ax in enumerate(axes[0]):
        ax.imshow(
            cells[day].astype(int), cmap=cmap, vmin=0, vmax=1, origin="upper", aspect="auto"
        )
        ax.set_xticks(range(grid.segments))
        ax.set_yticks(range(grid.seats))
        ax.set_xticks([x - 0.5 for x in range(grid.segments + 1)], minor=True)
        ax.set_yticks([y - 0.5 for y in range(grid.seats + 1)], minor=True)
        ax.grid(which="minor", color=GRID_LINE_COLOR, linewidth=0.5)
        ax.tick_params(which="both", length=0, labelsize=6)
        ax.set_title(f"Day {day}", fontsize=8)
        ax.set_xlabel("Segment", fontsize=7)
        if day == 0:
            ax.set_ylabel("Seat", fontsize=7)

    fig.suptitle(title or f"Occupancy ({grid.occupied_count()} segments)", fontsize=10)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
