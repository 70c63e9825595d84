"""Tests for the fixed-step integrator and the named field registry.

Tests for src.flowfield.vector_field and src.flowfield.fields:
    - compute() evaluates both component functions
    - advance() moves exactly ``nudge`` along the normalized direction
    - advance() at a stationary point raises DegenerateGeometryError
    - rewind(): stops at the iteration cap, at the grid boundary, and at
      or below the magnitude threshold (returning the input unchanged)
    - rewind() steps scale with the raw field magnitude
    - Registry lookups and error messages

Run:
    pytest tests/test_vector_field.py -v
"""

import math

import pytest

from src.flowfield.errors import DegenerateGeometryError
from src.flowfield.fields import DEFAULT_FIELD, available_fields, get_field, make_vfield
from src.flowfield.grid import Grid
from src.flowfield.vec2 import Vec2
from src.flowfield.vector_field import VField


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def grid():
    return Grid((100, 100), (-1.0, 1.0), (-1.0, 1.0))


@pytest.fixture
def uniform():
    """Constant flow to +x, magnitude 1."""
    return VField(lambda x, y: 1.0, lambda x, y: 0.0, 0.1)


@pytest.fixture
def vortex():
    return make_vfield('vortex', 0.02)


# ============================================================================
# CONSTRUCTION
# ============================================================================

def test_rejects_non_positive_nudge():
    with pytest.raises(ValueError, match="nudge must be positive"):
        VField(lambda x, y: x, lambda x, y: y, 0.0)


def test_rejects_non_callable():
    with pytest.raises(ValueError, match="callables"):
        VField(1.0, lambda x, y: y, 0.1)


# ============================================================================
# FORWARD INTEGRATION
# ============================================================================

def test_compute_evaluates_components():
    vf = VField(lambda x, y: x * y, lambda x, y: x - y, 0.1)
    assert vf.compute(Vec2(2.0, 3.0)) == Vec2(6.0, -1.0)


def test_compute_normal_is_unit():
    vf = make_vfield('saddle_spiral', 0.02)
    assert vf.compute_normal(Vec2(1.3, -0.7)).norm() == pytest.approx(1.0)


def test_advance_vortex_direction(vortex):
    nxt = vortex.advance(Vec2(1.0, 0.0))
    assert nxt.x == pytest.approx(1.0)
    assert nxt.y == pytest.approx(0.02)


@pytest.mark.parametrize("pt", [Vec2(1.3, -0.7), Vec2(-4.0, 2.5), Vec2(0.1, 5.0)])
def test_advance_step_length_is_nudge(pt):
    """Constant-speed marching: magnitude of the field is discarded."""
    vf = make_vfield('saddle_spiral', 0.02)
    assert vf.advance(pt).dist(pt) == pytest.approx(0.02)


def test_advance_at_stationary_point_raises(vortex):
    with pytest.raises(DegenerateGeometryError):
        vortex.advance(Vec2(0.0, 0.0))


# ============================================================================
# REVERSE INTEGRATION
# ============================================================================

def test_rewind_below_threshold_is_noop(vortex, grid):
    pt = Vec2(0.1, 0.0)   # |field| = 0.1
    assert vortex.rewind(pt, 1000, 0.5, grid) == pt


def test_rewind_at_threshold_is_noop(grid):
    vf = VField(lambda x, y: 0.5, lambda x, y: 0.0, 0.1)
    pt = Vec2(0.2, 0.2)
    assert vf.rewind(pt, 10, 0.5, grid) == pt


def test_rewind_zero_iterations(uniform, grid):
    pt = Vec2(0.3, 0.3)
    assert uniform.rewind(pt, 0, 0.0, grid) == pt


def test_rewind_iteration_cap(uniform, grid):
    pt = uniform.rewind(Vec2(0.0, 0.0), 3, 0.0, grid)
    assert pt.x == pytest.approx(-0.3)
    assert pt.y == 0.0


def test_rewind_stops_after_leaving_grid(uniform, grid):
    """The step that exits the grid is taken; no further steps follow."""
    pt = uniform.rewind(Vec2(0.0, 0.0), 1000, 0.0, grid)
    assert not grid.contains(pt)
    assert pt.x == pytest.approx(-1.1)


def test_rewind_start_outside_grid_is_noop(uniform, grid):
    pt = Vec2(3.0, 0.0)
    assert uniform.rewind(pt, 100, 0.0, grid) == pt


def test_rewind_uses_raw_magnitude(grid):
    vf = VField(lambda x, y: 2.0, lambda x, y: 0.0, 0.1)
    assert vf.rewind(Vec2(0.0, 0.0), 1, 0.0, grid).x == pytest.approx(-0.2)


def test_rewind_is_backwards_in_time(vortex, grid):
    """Advancing then rewinding one step lands near the start."""
    start = Vec2(0.6, 0.0)
    fwd = vortex.advance(start)
    # |field| = 0.6 at start, so scale the nudge to undo one unit step
    back = VField(vortex.dx, vortex.dy, 0.02 / 0.6).rewind(fwd, 1, 0.0, grid)
    assert back.dist(start) < 1e-3


# ============================================================================
# FIELD REGISTRY
# ============================================================================

def test_available_fields():
    names = available_fields()
    assert names == sorted(names)
    assert {'saddle_spiral', 'vortex', 'saddle', 'waves'} <= set(names)
    assert DEFAULT_FIELD in names


def test_saddle_spiral_formula():
    dx, dy = get_field('saddle_spiral')
    assert dx(1.0, 2.0) == 3.0    # (2 + 1)(2 - 1)
    assert dy(1.0, 2.0) == 9.0    # (4 - 1)(2 + 1)


def test_waves_formula():
    dx, dy = get_field('waves')
    assert dx(0.3, 9.0) == 1.0
    assert dy(math.pi / 2, 0.0) == pytest.approx(1.0)


def test_unknown_field_lists_choices():
    with pytest.raises(KeyError, match="Available: .*vortex"):
        get_field('tornado')


def test_make_vfield():
    vf = make_vfield('saddle', 0.05)
    assert isinstance(vf, VField)
    assert vf.nudge == 0.05
    assert vf.compute(Vec2(2.0, 3.0)) == Vec2(2.0, -3.0)
