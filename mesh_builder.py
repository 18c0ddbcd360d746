# mesh_builder.py

import numpy as np
import trimesh
import trimesh.creation
import trimesh.util
from typing import List, Optional, Tuple

# Import from other project modules
import constants as const
from geometry import extract_wall_centerlines
from grid_core import MazeConfigError
from maze_gen import Border
from utils import ring_radius, segment_length_sq

# Bottom quad 0-3, top quad 4-7
_PRISM_FACES = np.array(
    [
        [0, 1, 5],
        [0, 5, 4],
        [1, 2, 6],
        [1, 6, 5],
        [2, 3, 7],
        [2, 7, 6],
        [3, 0, 4],
        [3, 4, 7],  # Sides
        [4, 5, 6],
        [4, 6, 7],  # Top cap
        [3, 2, 1],
        [3, 1, 0],  # Bottom cap (reversed)
    ],
    dtype=np.int64,
)


def _is_mesh_degenerate(vertices: np.ndarray) -> bool:
    """Checks if any two vertices are too close together."""
    if vertices.shape[0] <= 1:
        return False
    if not np.all(np.isfinite(vertices)):
        return True
    diffs = vertices[:, None, :] - vertices[None, :, :]
    dist_sq = np.sum(diffs**2, axis=-1)
    np.fill_diagonal(dist_sq, np.inf)
    return bool(np.any(dist_sq < const.MESH_VERTEX_DISTANCE_TOLERANCE_SQ))


def _segment_base_quad(
    p1: np.ndarray, p2: np.ndarray, wall_thickness: float
) -> Optional[Tuple[Tuple[float, float], ...]]:
    """Rectangle of the given thickness centred on the segment p1 -> p2."""
    if segment_length_sq(p1, p2) < const.GEOMETRY_TOLERANCE**2:
        return None
    direction = (p2 - p1) / np.linalg.norm(p2 - p1)
    offset = np.array([-direction[1], direction[0]]) * (wall_thickness / 2.0)
    # Extend by half a thickness so neighbouring segments overlap at the joints
    p1e = p1 - direction * (wall_thickness / 2.0)
    p2e = p2 + direction * (wall_thickness / 2.0)
    return (
        tuple(p1e - offset),
        tuple(p2e - offset),
        tuple(p2e + offset),
        tuple(p1e + offset),
    )


def _create_extruded_prism_simple(
    base_verts_2d: Tuple[Tuple[float, float], ...],
    height: float,
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Extrudes a 2D quad straight up from z=0."""
    if len(base_verts_2d) != 4:
        return None  # Expect quads
    base_verts = np.array([[x, y, 0.0] for x, y in base_verts_2d])
    top_verts = base_verts + np.array([0.0, 0.0, height])
    verts = np.vstack((base_verts, top_verts))
    return verts, _PRISM_FACES.copy()


def create_2d_maze_mesh(
    borders: List[Border],
    outer_ring: int,
    wall_thickness: float = const.MAZE_2D_WALL_THICKNESS,
    wall_height: float = const.MAZE_2D_WALL_HEIGHT,
    base_height: float = const.MAZE_2D_BASE_HEIGHT,
    ring_spacing: float = const.RING_SPACING,
    samples_per_turn: int = const.ARC_SAMPLES_PER_TURN // 4,
) -> trimesh.Trimesh:
    """
    Builds a printable mesh of the maze: every border is sampled into straight
    segments, each segment is extruded into a wall prism, and the walls sit on
    a solid cylindrical base whose top is at z=0.
    """
    if wall_thickness <= 0 or wall_height <= 0:
        raise MazeConfigError("Wall thickness and height must be positive.")
    if base_height < 0:
        raise MazeConfigError("Base height must not be negative.")
    if ring_spacing <= wall_thickness:
        raise MazeConfigError(
            f"Ring spacing ({ring_spacing}) must exceed wall thickness ({wall_thickness})."
        )

    print("\n--- Generating 2D Maze Mesh ---")
    print(
        f"    Wall T/H={wall_thickness:.2f}/{wall_height:.2f}, Base H={base_height:.2f}"
    )

    # --- 1. Wall Prisms ---
    wall_meshes: List[trimesh.Trimesh] = []
    skipped = 0
    for pts in extract_wall_centerlines(borders, ring_spacing, samples_per_turn):
        for p1, p2 in zip(pts[:-1], pts[1:]):
            quad = _segment_base_quad(p1, p2, wall_thickness)
            if quad is None:
                skipped += 1
                continue
            verts, faces = _create_extruded_prism_simple(quad, wall_height)
            if _is_mesh_degenerate(verts):
                skipped += 1
                continue
            wall_meshes.append(trimesh.Trimesh(vertices=verts, faces=faces, process=False))
    print(f"  2D Wall Mesh Summary: Gen={len(wall_meshes)}, Skip={skipped}")
    if not wall_meshes:
        raise MazeConfigError("No wall segments to extrude; border list is empty.")

    # --- 2. Base Cylinder ---
    meshes = list(wall_meshes)
    if base_height > const.GEOMETRY_TOLERANCE:
        base_radius = ring_radius(outer_ring, ring_spacing) + wall_thickness / 2.0
        print(f"  Creating cylindrical base with radius: {base_radius:.3f}...")
        base_mesh = trimesh.creation.cylinder(
            radius=base_radius,
            height=base_height,
            sections=const.MAZE_2D_CYLINDER_SECTIONS,
        )
        base_mesh.apply_translation([0, 0, -base_height / 2.0])  # Top at z=0
        meshes.append(base_mesh)
    else:
        print("  Skipping base cylinder creation.")

    # --- 3. Combine ---
    combined = trimesh.util.concatenate(meshes)
    print(f"    Combined Walls & Base: {len(combined.vertices)}V, {len(combined.faces)}F")
    return combined


def export_maze_stl(mesh: trimesh.Trimesh, filename: str) -> str:
    """Writes the mesh to disk; the format follows the filename extension."""
    if mesh is None or len(mesh.faces) == 0:
        raise ValueError("Mesh is empty, nothing to export.")
    print(f"  Exporting maze mesh to {filename}...")
    mesh.export(filename)
    print("  Export complete.")
    return filename
