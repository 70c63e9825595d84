"""Unit tests for the immutable 2D vector.

Test cases:
    - Componentwise arithmetic (+, -, unary -, scalar *, /)
    - dot / norm / dist / lerp
    - normalize() on a regular and on a zero vector
    - Value semantics: frozen, hashable, unpackable
"""

import dataclasses
import math

import pytest

from src.flowfield.errors import DegenerateGeometryError
from src.flowfield.vec2 import Vec2


# ============================================================================
# ARITHMETIC
# ============================================================================

def test_add_sub_neg():
    a = Vec2(1.0, 2.0)
    b = Vec2(0.5, -4.0)

    assert a + b == Vec2(1.5, -2.0)
    assert a - b == Vec2(0.5, 6.0)
    assert -a == Vec2(-1.0, -2.0)


def test_scalar_mul_div():
    v = Vec2(3.0, -6.0)

    assert v * 2 == Vec2(6.0, -12.0)
    assert 0.5 * v == Vec2(1.5, -3.0)
    assert v / 3 == Vec2(1.0, -2.0)


def test_augmented_assignment_rebinds():
    """``+=`` returns a new vector; the original is untouched."""
    a = Vec2(1.0, 1.0)
    alias = a
    a += Vec2(1.0, 0.0)

    assert a == Vec2(2.0, 1.0)
    assert alias == Vec2(1.0, 1.0)


# ============================================================================
# METRIC OPERATIONS
# ============================================================================

def test_dot_norm_dist():
    a = Vec2(3.0, 4.0)

    assert a.dot(Vec2(1.0, 0.0)) == 3.0
    assert a.norm() == 5.0
    assert a.dist(Vec2(0.0, 0.0)) == 5.0
    assert Vec2(1.0, 1.0).dist(Vec2(4.0, 5.0)) == 5.0


def test_normalize():
    n = Vec2(3.0, 4.0).normalize()

    assert n.x == pytest.approx(0.6)
    assert n.y == pytest.approx(0.8)
    assert n.norm() == pytest.approx(1.0)


def test_normalize_zero_vector_raises():
    with pytest.raises(DegenerateGeometryError, match="zero vector"):
        Vec2(0.0, 0.0).normalize()


def test_lerp_endpoints_and_midpoint():
    a = Vec2(0.0, 10.0)
    b = Vec2(4.0, 2.0)

    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b
    assert a.lerp(b, 0.5) == Vec2(2.0, 6.0)


# ============================================================================
# VALUE SEMANTICS
# ============================================================================

def test_frozen():
    v = Vec2(1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0


def test_unpack_and_hash():
    x, y = Vec2(1.5, -2.5)
    assert (x, y) == (1.5, -2.5)
    assert len({Vec2(1.0, 2.0), Vec2(1.0, 2.0), Vec2(2.0, 1.0)}) == 2


def test_nan_components_propagate_through_arithmetic():
    v = Vec2(math.nan, 1.0) + Vec2(1.0, 1.0)
    assert math.isnan(v.x)
    assert v.y == 2.0
