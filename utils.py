# utils.py
import math
from fractions import Fraction
from numbers import Rational
from typing import Tuple, Union

import numpy as np

# Angles are exact fractions of a full turn in [0, 1)
Angle = Fraction


def make_angle(numerator: int, denominator: int = 1) -> Angle:
    """Builds an exact angle in turns, wrapped into [0, 1)."""
    if denominator == 0:
        raise ZeroDivisionError("Angle denominator must be non-zero.")
    return Fraction(numerator, denominator) % 1


def exact_fraction(value: Union[int, float, Rational, str]) -> Fraction:
    """
    Converts a user supplied number to an exact fraction.
    Floats go through their shortest decimal repr so 0.3 becomes 3/10
    rather than the nearest binary double.
    """
    if isinstance(value, bool):
        raise TypeError("Expected a number, got a bool.")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Expected a finite number, got {value}.")
        return Fraction(repr(value))
    return Fraction(value)


def angle_to_turns(angle: Angle) -> float:
    """Float position around the ring in turns (for drawing only)."""
    return float(angle)


def clockwise_sweep(start: Angle, end: Angle) -> Angle:
    """Exact angular distance walking from start to end in increasing angle; 1 if equal."""
    sweep = (end - start) % 1
    return sweep if sweep != 0 else Fraction(1)


def polar_to_cartesian(radius: float, turns: np.ndarray) -> np.ndarray:
    """Converts radius + angles (in turns) to an (n, 2) array of x/y points."""
    theta = 2 * math.pi * np.asarray(turns, dtype=float)
    return np.column_stack((radius * np.cos(theta), radius * np.sin(theta)))


def ring_radius(ring: int, ring_spacing: float) -> float:
    """Drawing radius of a ring; ring 0 sits one spacing away from the center."""
    return (ring + 1) * ring_spacing


def segment_length_sq(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    return dx * dx + dy * dy
