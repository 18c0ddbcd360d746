# grid_core.py
import math
from bisect import bisect_left
from fractions import Fraction
from typing import Iterator, List, NamedTuple, Optional

# Import from other project modules
import constants as const
from utils import Angle, exact_fraction, make_angle


class MazeConfigError(ValueError):
    """Raised when grid or export parameters are invalid."""


class MazeInvariantError(RuntimeError):
    """Raised when the grid or the carving loop reaches a state a valid grid cannot produce."""


class CircleCoordinate(NamedTuple):
    """A lattice point of the circular grid: ring index plus exact angle in turns."""

    ring: int
    angle: Angle

    def __repr__(self) -> str:
        return f"CircleCoordinate({self.ring}, {self.angle.numerator}/{self.angle.denominator})"


def is_on_grid(
    ring: int, angle: Angle, base_subdivision: int, min_distance: Fraction
) -> bool:
    """
    Checks whether an angle is a valid position on the given ring.

    Ring r is walked at (r + 1) * base_subdivision slices. A position that
    lines up with ring r - 1's slices (where an inward spoke can pass) is always
    kept. Any other position is kept only when its distance to the nearest
    coarser position, measured in ring r's own steps, is at least min_distance.
    All arithmetic is exact.
    """
    if not (0 <= angle < 1):
        return False
    steps = (ring + 1) * base_subdivision
    if (angle * steps).denominator != 1:
        return False
    if ring == 0:
        return True

    coarse_steps = ring * base_subdivision
    scaled = angle * coarse_steps
    if scaled.denominator == 1:
        return True

    below = math.floor(scaled)
    gap = min(scaled - below, below + 1 - scaled)  # in coarse steps
    return gap * steps / coarse_steps >= min_distance


class CircularGrid:
    """
    Immutable enumeration of all valid coordinates on rings 0..outer_ring.
    Each ring's coordinates are kept sorted by angle for binary-search lookups.
    """

    def __init__(
        self,
        outer_ring: int,
        base_subdivision: int = const.DEFAULT_BASE_SUBDIVISION,
        min_distance: float = const.DEFAULT_MIN_ANGULAR_DISTANCE,
    ):
        for name, value in (("outer_ring", outer_ring), ("base_subdivision", base_subdivision)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise MazeConfigError(f"{name} must be an integer, got {value!r}.")
        if outer_ring < 1:
            raise MazeConfigError("outer_ring must be at least 1 (two rings).")
        if base_subdivision < 1:
            raise MazeConfigError("base_subdivision must be positive.")
        try:
            exact_min_distance = exact_fraction(min_distance)
        except (TypeError, ValueError) as e:
            raise MazeConfigError(f"Invalid min_distance {min_distance!r}: {e}") from e
        if not (0 <= exact_min_distance < 1):
            raise MazeConfigError(
                f"min_distance ({min_distance}) must be in [0, 1)."
            )

        self.outer_ring = outer_ring
        self.base_subdivision = base_subdivision
        self.min_distance = exact_min_distance

        self._angles: List[List[Angle]] = []  # Sorted angles per ring
        self._coords: List[List[CircleCoordinate]] = []

        print(
            f"--- Initializing Grid (Rings={self.outer_ring + 1}, Base slices={self.base_subdivision}, Min distance={float(self.min_distance):.3f}) ---"
        )
        self._enumerate_rings()
        print(f"--- Grid Initialized: {self.size()} coordinates ---")

    def _enumerate_rings(self):
        """Walks every ring at its own resolution and keeps the valid positions."""
        for ring in range(self.outer_ring + 1):
            steps = self.slices_on_ring(ring)
            candidates = (make_angle(k, steps) for k in range(steps))
            angles = [
                a for a in candidates
                if is_on_grid(ring, a, self.base_subdivision, self.min_distance)
            ]
            self._angles.append(angles)
            self._coords.append([CircleCoordinate(ring, a) for a in angles])
            dropped = steps - len(angles)
            if dropped:
                print(f"    Ring {ring}: {len(angles)}/{steps} positions ({dropped} too close to a spoke)")

    def slices_on_ring(self, ring: int) -> int:
        """Number of slices ring is walked at (before distance filtering)."""
        return (ring + 1) * self.base_subdivision

    def coords_on_ring(self, ring: int) -> List[CircleCoordinate]:
        """Returns the sorted coordinates of a ring."""
        if not (0 <= ring <= self.outer_ring):
            raise IndexError(f"Ring {ring} outside grid (0..{self.outer_ring}).")
        return list(self._coords[ring])

    def ring_count(self, ring: int) -> int:
        if not (0 <= ring <= self.outer_ring):
            raise IndexError(f"Ring {ring} outside grid (0..{self.outer_ring}).")
        return len(self._coords[ring])

    def size(self) -> int:
        """Returns the total number of coordinates in the grid."""
        return sum(len(coords) for coords in self._coords)

    def get_all_coords(self) -> Iterator[CircleCoordinate]:
        """Iterates all coordinates in (ring, angle) order."""
        for coords in self._coords:
            yield from coords

    def _has_angle(self, ring: int, angle: Angle) -> bool:
        angles = self._angles[ring]
        idx = bisect_left(angles, angle)
        return idx < len(angles) and angles[idx] == angle

    def contains(self, coord: CircleCoordinate) -> bool:
        ring, angle = coord
        if not (0 <= ring <= self.outer_ring):
            return False
        return self._has_angle(ring, angle)

    def next_angle(self, ring: int, angle: Angle) -> Angle:
        """Next position on the ring in increasing angle, skipping dropped positions."""
        return self._step_angle(ring, angle, Fraction(1, self.slices_on_ring(ring)))

    def prev_angle(self, ring: int, angle: Angle) -> Angle:
        """Previous position on the ring in decreasing angle, skipping dropped positions."""
        return self._step_angle(ring, angle, -Fraction(1, self.slices_on_ring(ring)))

    def _step_angle(self, ring: int, angle: Angle, step: Fraction) -> Angle:
        candidate = angle
        for _ in range(self.slices_on_ring(ring)):
            candidate = make_angle(candidate + step)
            if self._has_angle(ring, candidate):
                return candidate
        raise MazeInvariantError(
            f"No position found on ring {ring} stepping from {angle}."
        )

    def neighbour(
        self, coord: CircleCoordinate, direction: str
    ) -> Optional[CircleCoordinate]:
        """
        Computes the adjacent coordinate in a direction, or None if there is none.
        Radial moves keep the angle and are plain membership lookups against
        the target ring, which was validity-filtered during enumeration.
        """
        if not self.contains(coord):
            raise MazeInvariantError(f"{coord!r} is not a position on the grid.")
        ring, angle = coord

        if direction in (const.DIR_CW, const.DIR_CCW):
            # A single-position ring has no rotational neighbour
            if len(self._angles[ring]) == 1:
                return None
            if direction == const.DIR_CW:
                return CircleCoordinate(ring, self.next_angle(ring, angle))
            return CircleCoordinate(ring, self.prev_angle(ring, angle))
        if direction == const.DIR_IN:
            if ring == 0:
                return None
            candidate = CircleCoordinate(ring - 1, angle)
        elif direction == const.DIR_OUT:
            if ring == self.outer_ring:
                return None
            candidate = CircleCoordinate(ring + 1, angle)
        else:
            raise ValueError(f"Unknown direction: {direction!r}")

        return candidate if self.contains(candidate) else None

    def distributor(self, rng=None):
        """Returns a fresh claim tracker over this grid."""
        from distributor import CircularDistributor

        return CircularDistributor(self, rng)

    def __repr__(self) -> str:
        return (
            f"CircularGrid(outer_ring={self.outer_ring}, base_subdivision={self.base_subdivision}, "
            f"min_distance={self.min_distance})"
        )
