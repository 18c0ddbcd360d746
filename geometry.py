# geometry.py
import math
from collections import deque
from typing import Dict, List, Set, Tuple

import numpy as np

# Import from other project modules
import constants as const
from grid_core import CircleCoordinate, CircularGrid
from maze_gen import Border
from utils import angle_to_turns, clockwise_sweep, polar_to_cartesian, ring_radius

WallEdge = Tuple[CircleCoordinate, CircleCoordinate]


# --- Topology (exact, on grid coordinates) ---
def expand_border(grid: CircularGrid, border: Border) -> List[WallEdge]:
    """
    Splits a border into unit wall edges between adjacent grid coordinates.
    Arcs are walked in increasing angle, a closed ring is walked all the way round.
    """
    start, end = border
    for coord in (start, end):
        if not grid.contains(coord):
            raise ValueError(f"Border endpoint {coord!r} is not on the grid.")

    edges: List[WallEdge] = []
    if border.border_type == const.BORDER_LINE:
        if start.angle != end.angle or start.ring >= end.ring:
            raise ValueError(f"Malformed line border {border!r}.")
        for ring in range(start.ring, end.ring):
            inner = CircleCoordinate(ring, start.angle)
            outer = CircleCoordinate(ring + 1, start.angle)
            if not grid.contains(inner):
                raise ValueError(f"Line border {border!r} crosses missing position {inner!r}.")
            edges.append((inner, outer))
        return edges

    ring = start.ring
    if grid.ring_count(ring) == 1:
        return edges  # A single position has no arc to walk
    current = start
    for _ in range(grid.ring_count(ring)):
        nxt = CircleCoordinate(ring, grid.next_angle(ring, current.angle))
        edges.append((current, nxt))
        current = nxt
        if current == end:
            return edges
    raise ValueError(f"Arc border {border!r} never reaches its end.")


def wall_edges(grid: CircularGrid, borders: List[Border]) -> List[WallEdge]:
    """All unit wall edges covered by the border list."""
    edges: List[WallEdge] = []
    for border in borders:
        edges.extend(expand_border(grid, border))
    return edges


def wall_graph_summary(grid: CircularGrid, borders: List[Border]) -> Dict[str, object]:
    """
    Counts nodes, edges and connected components of the wall graph.
    With an entrance in the boundary, a perfect maze's walls form a spanning tree.
    """
    edges = wall_edges(grid, borders)
    adjacency: Dict[CircleCoordinate, Set[CircleCoordinate]] = {
        coord: set() for coord in grid.get_all_coords()
    }
    duplicates = 0
    for a, b in edges:
        if b in adjacency[a]:
            duplicates += 1
        adjacency[a].add(b)
        adjacency[b].add(a)

    # BFS over the wall graph
    seen: Set[CircleCoordinate] = set()
    components = 0
    for root in adjacency:
        if root in seen:
            continue
        components += 1
        seen.add(root)
        queue = deque([root])
        while queue:
            current = queue.popleft()
            for nxt in adjacency[current]:
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)

    nodes = len(adjacency)
    return {
        "nodes": nodes,
        "edges": len(edges),
        "duplicate_edges": duplicates,
        "components": components,
        "is_tree": components == 1 and duplicates == 0 and len(edges) == nodes - 1,
    }


def find_unmerged_pairs(borders: List[Border]) -> List[Tuple[Border, Border]]:
    """Same-type borders where one ends exactly where the other starts."""
    by_start: Dict[Tuple[str, CircleCoordinate], List[Border]] = {}
    for border in borders:
        if not border.is_closed:
            by_start.setdefault((border.border_type, border.start), []).append(border)

    pairs = []
    for border in borders:
        if border.is_closed:
            continue
        for follower in by_start.get((border.border_type, border.end), []):
            pairs.append((border, follower))
    return pairs


# --- Drawing coordinates (floating point, for renderers only) ---
def border_polyline(
    border: Border,
    ring_spacing: float = const.RING_SPACING,
    samples_per_turn: int = const.ARC_SAMPLES_PER_TURN,
) -> np.ndarray:
    """Returns a border as an (n, 2) array of Cartesian points around the origin."""
    start, end = border
    if border.border_type == const.BORDER_LINE:
        turns = angle_to_turns(start.angle)
        inner = polar_to_cartesian(ring_radius(start.ring, ring_spacing), [turns])
        outer = polar_to_cartesian(ring_radius(end.ring, ring_spacing), [turns])
        return np.vstack((inner, outer))

    sweep = float(clockwise_sweep(start.angle, end.angle))
    num_points = max(2, math.ceil(sweep * samples_per_turn) + 1)
    start_turns = angle_to_turns(start.angle)
    turns = np.linspace(start_turns, start_turns + sweep, num_points)
    return polar_to_cartesian(ring_radius(start.ring, ring_spacing), turns)


def extract_wall_centerlines(
    borders: List[Border],
    ring_spacing: float = const.RING_SPACING,
    samples_per_turn: int = const.ARC_SAMPLES_PER_TURN,
) -> List[np.ndarray]:
    """Polylines for every border, in border-list order."""
    return [border_polyline(b, ring_spacing, samples_per_turn) for b in borders]
