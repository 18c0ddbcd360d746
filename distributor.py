# distributor.py
import random
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Set, Tuple

# Import from other project modules
import constants as const
from grid_core import CircleCoordinate, CircularGrid, MazeInvariantError


class Distributor(ABC):
    """
    Claim/neighbour capability the maze builder carves against.
    Any topology that can enumerate positions, claim them and name their
    neighbours can be plugged in without touching the carving algorithm.
    """

    @property
    @abstractmethod
    def outer_ring(self) -> int:
        ...

    @abstractmethod
    def coordinates(self) -> Iterator[CircleCoordinate]:
        ...

    @abstractmethod
    def take_from_outer_circle(self) -> Tuple[CircleCoordinate, str]:
        ...

    @abstractmethod
    def consume_outer_circle(self):
        ...

    @abstractmethod
    def take_free(self) -> Optional[CircleCoordinate]:
        ...

    @abstractmethod
    def take_neighbour(
        self, coord: CircleCoordinate, direction: str
    ) -> Optional[Tuple[CircleCoordinate, str]]:
        ...


class CircularDistributor(Distributor):
    """
    Tracks which coordinates of a CircularGrid have been claimed.

    The grid itself is never modified. Unclaimed coordinates live in a list
    with a position index so a random one can be drawn and removed in O(1).
    Claims are permanent.
    """

    def __init__(self, grid: CircularGrid, rng=None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self._claimed: Set[CircleCoordinate] = set()
        self._free: List[CircleCoordinate] = list(grid.get_all_coords())
        self._free_index: Dict[CircleCoordinate, int] = {
            coord: i for i, coord in enumerate(self._free)
        }

    @property
    def outer_ring(self) -> int:
        return self.grid.outer_ring

    def coordinates(self) -> Iterator[CircleCoordinate]:
        return self.grid.get_all_coords()

    def is_claimed(self, coord: CircleCoordinate) -> bool:
        return coord in self._claimed

    def claimed_count(self) -> int:
        return len(self._claimed)

    def free_count(self) -> int:
        return len(self._free)

    def _claim(self, coord: CircleCoordinate) -> str:
        """Claims a coordinate and reports the state it was in before."""
        if coord in self._claimed:
            return const.CELL_TAKEN
        idx = self._free_index.pop(coord)
        last = self._free.pop()
        if idx < len(self._free):
            # Move the former last entry into the vacated slot
            self._free[idx] = last
            self._free_index[last] = idx
        self._claimed.add(coord)
        return const.CELL_FREE

    def take_from_outer_circle(self) -> Tuple[CircleCoordinate, str]:
        """Claims a random unclaimed coordinate on the outermost ring (the maze entrance)."""
        outer = self.grid.coords_on_ring(self.grid.outer_ring)
        unclaimed = [c for c in outer if c not in self._claimed]
        if unclaimed:
            coord = unclaimed[self.rng.randrange(len(unclaimed))]
        else:
            coord = outer[self.rng.randrange(len(outer))]
        return coord, self._claim(coord)

    def consume_outer_circle(self):
        """Claims every coordinate on the outermost ring."""
        for coord in self.grid.coords_on_ring(self.grid.outer_ring):
            self._claim(coord)

    def take_free(self) -> Optional[CircleCoordinate]:
        """Claims and returns a random unclaimed coordinate, or None once all are claimed."""
        if not self._free:
            return None
        coord = self._free[self.rng.randrange(len(self._free))]
        self._claim(coord)
        return coord

    def take_neighbour(
        self, coord: CircleCoordinate, direction: str
    ) -> Optional[Tuple[CircleCoordinate, str]]:
        """Claims the neighbour of coord in direction and reports its previous state."""
        neighbour = self.grid.neighbour(coord, direction)
        if neighbour is None:
            return None
        if neighbour not in self._claimed and neighbour not in self._free_index:
            raise MazeInvariantError(
                f"Neighbour {neighbour!r} of {coord!r} is not tracked by the distributor."
            )
        return neighbour, self._claim(neighbour)
