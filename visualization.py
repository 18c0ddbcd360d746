# visualization.py
import matplotlib

matplotlib.use("Agg")  # File output only, no display needed

import matplotlib.pyplot as plt
import numpy as np
from typing import List, Optional, Tuple

# Import from other project modules
import constants as const
from geometry import extract_wall_centerlines
from grid_core import CircleCoordinate, CircularGrid
from maze_gen import Border
from utils import angle_to_turns, polar_to_cartesian, ring_radius


# --- Visualization Helpers ---
def _setup_plot(outer_ring: int, ring_spacing: float) -> Tuple[plt.Figure, plt.Axes]:
    """Creates a square, axis-free plot big enough for the outer ring."""
    fig, ax = plt.subplots(figsize=const.VIS_FIGSIZE)
    limit = ring_radius(outer_ring, ring_spacing) * 1.05
    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig, ax


def _draw_ring_guides(ax: plt.Axes, outer_ring: int, ring_spacing: float):
    """Draws faint full circles for every ring."""
    turns = np.linspace(0.0, 1.0, const.ARC_SAMPLES_PER_TURN + 1)
    for ring in range(outer_ring + 1):
        pts = polar_to_cartesian(ring_radius(ring, ring_spacing), turns)
        ax.plot(pts[:, 0], pts[:, 1], color=const.VIS_RING_COLOR, lw=const.VIS_RING_LW)


def _draw_walls(ax: plt.Axes, borders: List[Border], ring_spacing: float) -> int:
    polylines = extract_wall_centerlines(borders, ring_spacing)
    print(f"  Visualizing {len(polylines)} wall borders...")
    for pts in polylines:
        ax.plot(
            pts[:, 0],
            pts[:, 1],
            const.VIS_WALL_LINE_STYLE,
            lw=const.VIS_WALL_LINE_LW,
            alpha=const.VIS_WALL_LINE_ALPHA,
            solid_capstyle="round",
        )
    return len(polylines)


def _coord_xy(coord: CircleCoordinate, ring_spacing: float) -> np.ndarray:
    return polar_to_cartesian(ring_radius(coord.ring, ring_spacing), [angle_to_turns(coord.angle)])[0]


# --- Main Visualization Functions ---
def visualize_maze_walls(
    borders: List[Border],
    outer_ring: int,
    filename: str = "maze.svg",
    ring_spacing: float = const.RING_SPACING,
    entrance: Optional[Tuple[CircleCoordinate, CircleCoordinate]] = None,
) -> str:
    """Draws the maze borders; the output format follows the filename extension."""
    print(f"--- Generating Maze Walls Visualization: {filename} ---")
    fig, ax = _setup_plot(outer_ring, ring_spacing)
    try:
        count = _draw_walls(ax, borders, ring_spacing)
        if entrance:
            mid = (_coord_xy(entrance[0], ring_spacing) + _coord_xy(entrance[1], ring_spacing)) / 2.0
            ax.plot(
                mid[0],
                mid[1],
                const.VIS_ENTRY_MARKER,
                markersize=const.VIS_ENTRY_MARKER_SIZE,
                alpha=const.VIS_ENTRY_MARKER_ALPHA,
                label="Entrance",
            )
        ax.set_title(f"Circular Maze ({count} Borders)")
        fig.savefig(filename, dpi=const.VIS_DPI, bbox_inches="tight")
    finally:
        plt.close(fig)
    print(f"  Walls visualization saved to {filename}")
    return filename


def visualize_grid_layout(
    grid: CircularGrid,
    filename: str = "grid_layout.png",
    ring_spacing: float = const.RING_SPACING,
) -> str:
    """Marks every grid coordinate on top of faint ring guides."""
    print(f"--- Generating Grid Layout Visualization: {filename} ---")
    fig, ax = _setup_plot(grid.outer_ring, ring_spacing)
    try:
        _draw_ring_guides(ax, grid.outer_ring, ring_spacing)
        for ring in range(grid.outer_ring + 1):
            coords = grid.coords_on_ring(ring)
            turns = [angle_to_turns(c.angle) for c in coords]
            pts = polar_to_cartesian(ring_radius(ring, ring_spacing), turns)
            ax.plot(pts[:, 0], pts[:, 1], const.VIS_POINT_MARKER, markersize=const.VIS_POINT_SIZE)
        ax.set_title(f"Grid Layout ({grid.size()} Coordinates)")
        fig.savefig(filename, dpi=const.VIS_DPI, bbox_inches="tight")
    finally:
        plt.close(fig)
    print(f"  Layout visualization saved to {filename}")
    return filename
