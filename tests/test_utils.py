# tests/test_utils.py
from fractions import Fraction

import numpy as np
import pytest

from utils import (
    angle_to_turns,
    clockwise_sweep,
    exact_fraction,
    make_angle,
    polar_to_cartesian,
    ring_radius,
)


def test_make_angle_wraps_and_reduces():
    assert make_angle(5, 4) == Fraction(1, 4)
    assert make_angle(-1, 8) == Fraction(7, 8)
    assert make_angle(6, 8) == Fraction(3, 4)
    assert make_angle(6, 8).denominator == 4
    with pytest.raises(ZeroDivisionError):
        make_angle(1, 0)


def test_exact_fraction_uses_decimal_value():
    assert exact_fraction(0.3) == Fraction(3, 10)
    assert exact_fraction(1) == 1
    assert exact_fraction("1/4") == Fraction(1, 4)
    with pytest.raises(TypeError):
        exact_fraction(True)
    with pytest.raises(ValueError):
        exact_fraction(float("inf"))


def test_clockwise_sweep():
    assert clockwise_sweep(Fraction(3, 4), Fraction(1, 4)) == Fraction(1, 2)
    assert clockwise_sweep(Fraction(1, 4), Fraction(3, 4)) == Fraction(1, 2)
    assert clockwise_sweep(Fraction(1, 3), Fraction(1, 3)) == 1


def test_float_conversions():
    assert angle_to_turns(Fraction(1, 4)) == 0.25
    assert ring_radius(0, 10.0) == 10.0
    assert ring_radius(3, 2.5) == 10.0
    pts = polar_to_cartesian(2.0, [0.0, 0.25])
    np.testing.assert_allclose(pts, [[2.0, 0.0], [0.0, 2.0]], atol=1e-12)
