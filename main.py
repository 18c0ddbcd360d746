# main.py
import argparse
import os
import random
import sys
import time
import traceback
from typing import List, Optional

# Import project modules
import constants as const
from geometry import find_unmerged_pairs, wall_graph_summary
from grid_core import CircularGrid, MazeConfigError, MazeInvariantError
from maze_gen import MazeBuilder
from mesh_builder import create_2d_maze_mesh, export_maze_stl
from visualization import visualize_grid_layout, visualize_maze_walls


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a perfect maze on a concentric-ring grid",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--rings", type=int, default=const.DEFAULT_NUM_RINGS,
                        help="Number of rings, including the outer boundary ring")
    parser.add_argument("--slices", type=int, default=const.DEFAULT_BASE_SUBDIVISION,
                        help="Angular subdivision of the innermost ring")
    parser.add_argument("--min-distance", type=float, default=const.DEFAULT_MIN_ANGULAR_DISTANCE,
                        help="Minimum separation from a spoke, as a fraction of a ring step")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output-dir", default="output", help="Directory for generated files")
    parser.add_argument("--no-entrance", action="store_true",
                        help="Close the outer ring completely")
    parser.add_argument("--no-png", action="store_true", help="Skip the PNG rendering")
    parser.add_argument("--no-stl", action="store_true", help="Skip the STL export")
    parser.add_argument("--grid-plot", action="store_true",
                        help="Also plot every grid coordinate to grid_layout.png")
    return parser.parse_args(argv)


def run_generation(args: argparse.Namespace) -> int:
    start_time = time.time()
    os.makedirs(args.output_dir, exist_ok=True)

    print("\n--- Configuration ---")
    print(f"  Rings: {args.rings}, Slices: {args.slices}, Min distance: {args.min_distance}")
    print(f"  Seed: {args.seed}, Entrance: {not args.no_entrance}")

    rng = random.Random(args.seed)
    try:
        grid = CircularGrid(args.rings - 1, args.slices, args.min_distance)
    except MazeConfigError as e:
        print(f"ERROR: {e}")
        return 2

    if args.grid_plot:
        try:
            visualize_grid_layout(grid, os.path.join(args.output_dir, "grid_layout.png"))
        except Exception as e:
            print(f"ERROR during grid layout visualization: {e}")
            traceback.print_exc()

    builder = MazeBuilder(grid.distributor(rng), rng, with_entrance=not args.no_entrance)
    try:
        borders = builder.build()
    except MazeInvariantError as e:
        print(f"ERROR: internal invariant violated: {e}")
        traceback.print_exc()
        return 3

    summary = wall_graph_summary(grid, borders)
    print(
        f"  Wall graph: {summary['nodes']} nodes, {summary['edges']} edges, "
        f"{summary['components']} component(s), tree={summary['is_tree']}"
    )
    unmerged = find_unmerged_pairs(borders)
    if unmerged:
        print(f"  Warning: {len(unmerged)} border pairs left unmerged.")

    # --- Renderings ---
    outputs = [os.path.join(args.output_dir, "maze.svg")]
    if not args.no_png:
        outputs.append(os.path.join(args.output_dir, "maze.png"))
    for filename in outputs:
        try:
            visualize_maze_walls(borders, grid.outer_ring, filename, entrance=builder.entrance)
        except Exception as e:
            print(f"ERROR during visualization of {filename}: {e}")
            traceback.print_exc()

    # --- Create 2D Flat STL ---
    if not args.no_stl:
        try:
            mesh = create_2d_maze_mesh(borders, grid.outer_ring)
            export_maze_stl(mesh, os.path.join(args.output_dir, "maze_2d_flat.stl"))
        except Exception as e:
            print(f"An error occurred during 2D STL generation: {e}")
            traceback.print_exc()

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return run_generation(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
