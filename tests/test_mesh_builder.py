# tests/test_mesh_builder.py
import random

import numpy as np
import pytest

from grid_core import CircularGrid, MazeConfigError
from maze_gen import build_maze
from mesh_builder import (
    _create_extruded_prism_simple,
    _is_mesh_degenerate,
    create_2d_maze_mesh,
    export_maze_stl,
)


@pytest.fixture(scope="module")
def maze():
    grid = CircularGrid(2, 4, 0)
    rng = random.Random(9)
    return grid, build_maze(grid.distributor(rng), rng)


def test_prism_helpers():
    verts, faces = _create_extruded_prism_simple(((0, 0), (1, 0), (1, 1), (0, 1)), 2.0)
    assert verts.shape == (8, 3)
    assert faces.shape == (12, 3)
    assert np.allclose(verts[4:, 2], 2.0)
    assert not _is_mesh_degenerate(verts)
    assert _is_mesh_degenerate(np.zeros((2, 3)))
    assert _create_extruded_prism_simple(((0, 0), (1, 0), (1, 1)), 1.0) is None


def test_mesh_has_walls_and_base(maze, tmp_path):
    grid, borders = maze
    mesh = create_2d_maze_mesh(borders, grid.outer_ring, wall_thickness=1.0, wall_height=2.0, base_height=0.5)
    assert len(mesh.faces) > 0
    bounds = mesh.bounds
    assert bounds[0][2] == pytest.approx(-0.5)
    assert bounds[1][2] == pytest.approx(2.0)

    out = tmp_path / "maze.stl"
    export_maze_stl(mesh, str(out))
    assert out.stat().st_size > 0


def test_mesh_without_base(maze):
    grid, borders = maze
    mesh = create_2d_maze_mesh(borders, grid.outer_ring, base_height=0.0)
    assert mesh.bounds[0][2] == pytest.approx(0.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"wall_thickness": 0.0},
        {"wall_height": -1.0},
        {"base_height": -0.1},
        {"wall_thickness": 20.0, "ring_spacing": 10.0},
    ],
)
def test_invalid_mesh_configuration(maze, kwargs):
    grid, borders = maze
    with pytest.raises(MazeConfigError):
        create_2d_maze_mesh(borders, grid.outer_ring, **kwargs)


def test_empty_border_list_is_rejected():
    with pytest.raises(MazeConfigError):
        create_2d_maze_mesh([], 1)
