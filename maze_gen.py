# maze_gen.py
import random
from typing import List, NamedTuple, Optional, Set, Tuple

# Import from other project modules
import constants as const
from distributor import Distributor
from grid_core import CircleCoordinate, MazeInvariantError


class Border(NamedTuple):
    """
    A wall segment between two lattice points.
    Arcs run in increasing angle along one ring, lines run outward at one angle.
    start == end marks a fully closed ring.
    """

    start: CircleCoordinate
    end: CircleCoordinate

    @property
    def border_type(self) -> str:
        if self.start.ring == self.end.ring:
            return const.BORDER_ARC
        return const.BORDER_LINE

    @property
    def is_closed(self) -> bool:
        return self.start == self.end


# (border type, orientation) for each carving direction; True keeps from -> to
_MOVE_KINDS = {
    const.DIR_OUT: (const.BORDER_LINE, True),
    const.DIR_IN: (const.BORDER_LINE, False),
    const.DIR_CW: (const.BORDER_ARC, True),
    const.DIR_CCW: (const.BORDER_ARC, False),
}


class MazeBuilder:
    """
    Carves a perfect maze over a Distributor.

    Walls grow as a tree of random walks rooted on the outer boundary: each
    walk starts from an unclaimed coordinate and ends on the first step that
    touches an already claimed one. Every unit step is merged into the border
    list so straight runs come out as a single Arc or Line.
    """

    def __init__(self, distributor: Distributor, rng=None, with_entrance: bool = True):
        self.dist = distributor
        self.rng = rng if rng is not None else random.Random()
        self.with_entrance = with_entrance
        self.borders: List[Border] = []
        self.state = const.STATE_SEEDING
        self.entrance: Optional[Tuple[CircleCoordinate, CircleCoordinate]] = None
        self.paths = 0
        self.moves = 0

    def build(self) -> List[Border]:
        """Runs the state machine until every coordinate is claimed."""
        if self.state != const.STATE_SEEDING:
            raise MazeInvariantError("MazeBuilder.build() can only run once.")
        print("--- Starting Maze Generation (Randomized Wall Growth) ---")

        head: Optional[CircleCoordinate] = None
        while self.state != const.STATE_DONE:
            if self.state == const.STATE_SEEDING:
                self._seed()
                self.state = const.STATE_SEEKING
            elif self.state == const.STATE_SEEKING:
                head = self.dist.take_free()
                self.state = const.STATE_DONE if head is None else const.STATE_CARVING
            elif self.state == const.STATE_CARVING:
                self._carve_path(head)
                self.paths += 1
                self.state = const.STATE_SEEKING

        print(
            f"--- Maze Generation Complete: {self.paths} paths, {self.moves} wall steps, {len(self.borders)} borders ---"
        )
        return self.borders

    def _seed(self):
        """Picks the entrance on the outer ring and closes the rest of the boundary."""
        seed, _state = self.dist.take_from_outer_circle()
        self.dist.consume_outer_circle()

        gate = None
        if self.with_entrance:
            neighbour = self.dist.take_neighbour(seed, const.DIR_CW)
            if neighbour is not None:
                gate = neighbour[0]

        if gate is None:
            self.borders.append(Border(seed, seed))
            print(f"  Outer ring {seed.ring} fully closed at {seed!r}")
        else:
            # Boundary runs from the gate all the way round to the seed
            self.borders.append(Border(gate, seed))
            self.entrance = (seed, gate)
            print(f"  Entrance between {seed!r} and {gate!r}")

    def _carve_path(self, start: CircleCoordinate) -> List[CircleCoordinate]:
        """Grows one wall path from start until it touches claimed territory."""
        visited: List[CircleCoordinate] = [start]
        visited_set: Set[CircleCoordinate] = {start}
        options: List[Tuple[CircleCoordinate, str]] = []
        head = start

        while True:
            options.extend((head, direction) for direction in const.ALL_DIRECTIONS)
            from_coord, to_coord, direction, state = self._next_move(options, visited_set)

            visited.append(to_coord)
            visited_set.add(to_coord)
            self._record_move(from_coord, to_coord, direction)

            if state == const.CELL_TAKEN:
                return visited
            head = to_coord

    def _next_move(
        self,
        options: List[Tuple[CircleCoordinate, str]],
        visited: Set[CircleCoordinate],
    ) -> Tuple[CircleCoordinate, CircleCoordinate, str, str]:
        """Draws options at random until one leads outside the current path."""
        while options:
            candidate_start, direction = options.pop(self.rng.randrange(len(options)))
            result = self.dist.take_neighbour(candidate_start, direction)
            if result is None:
                continue
            end, state = result
            if end in visited:
                continue
            return candidate_start, end, direction, state

        raise MazeInvariantError(
            f"Carving options exhausted after {len(visited)} coordinates; the grid has an unreachable region."
        )

    def _record_move(self, from_coord: CircleCoordinate, to_coord: CircleCoordinate, direction: str):
        border_type, forward = _MOVE_KINDS[direction]
        if forward:
            self.merge(from_coord, to_coord, border_type)
        else:
            self.merge(to_coord, from_coord, border_type)
        self.moves += 1

    def merge(self, start: CircleCoordinate, end: CircleCoordinate, border_type: str) -> Border:
        """
        Adds the wall segment start -> end, splicing it onto a same-type border
        ending at start and/or one starting at end.
        """
        merged_start, merged_end = start, end

        before = self._find(border_type, end_at=merged_start)
        if before is not None:
            merged_start = self.borders.pop(before).start

        after = self._find(border_type, start_at=merged_end)
        if after is not None:
            merged_end = self.borders.pop(after).end

        border = Border(merged_start, merged_end)
        self.borders.append(border)
        return border

    def _find(
        self,
        border_type: str,
        end_at: Optional[CircleCoordinate] = None,
        start_at: Optional[CircleCoordinate] = None,
    ) -> Optional[int]:
        for i, border in enumerate(self.borders):
            if border.border_type != border_type or border.is_closed:
                continue
            if end_at is not None and border.end == end_at:
                return i
            if start_at is not None and border.start == start_at:
                return i
        return None


def build_maze(distributor: Distributor, rng=None, with_entrance: bool = True) -> List[Border]:
    """Generates the border list of a perfect maze over the distributor's grid."""
    return MazeBuilder(distributor, rng, with_entrance=with_entrance).build()
