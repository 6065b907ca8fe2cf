"""Tests for traversal planning and grid size validation."""

from __future__ import annotations

import numpy as np
import pytest

from domain.terrain.errors import InvalidGridSizeError
from domain.terrain.traversal import (
    diamond_points,
    is_valid_grid_size,
    iter_levels,
    plan_traversal,
    square_points,
    validate_grid_size,
)
from domain.terrain.value_objects import GridSize, StepKind, TraversalPoint

SQ = StepKind.SQUARE
DI = StepKind.DIAMOND


# ---------------------------------------------------------------------------
# Validation entry point
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("value", [3, 5, 9, 17, 1025, np.int64(33)])
def test_valid_grid_sizes(value):
    assert is_valid_grid_size(value)
    assert validate_grid_size(value).value == int(value)


@pytest.mark.parametrize("value", [-3, 0, 1, 2, 4, 6, 10, 1024, "5", 5.0, True, None])
def test_invalid_grid_sizes(value):
    assert not is_valid_grid_size(value)
    with pytest.raises(InvalidGridSizeError) as exc:
        validate_grid_size(value)
    assert exc.value.grid_size == value
    assert "power of two, plus 1" in str(exc.value)


def test_validate_passes_grid_size_through():
    size = GridSize(value=9)
    assert validate_grid_size(size) is size


def test_plan_rejects_invalid_size():
    with pytest.raises(InvalidGridSizeError):
        plan_traversal(6)


# ---------------------------------------------------------------------------
# Concrete plans
# ---------------------------------------------------------------------------
def test_plan_grid_size_3():
    assert plan_traversal(3) == (
        TraversalPoint(SQ, 2, 2),
        TraversalPoint(DI, 1, 2),
        TraversalPoint(DI, 2, 1),
    )


def test_plan_grid_size_5():
    plan = plan_traversal(5)

    # Top level: one square, and the far edge midpoints (3, 5) and (5, 3)
    # alias the near ones on the torus, leaving two diamonds
    assert plan[:3] == (
        TraversalPoint(SQ, 3, 3),
        TraversalPoint(DI, 1, 3),
        TraversalPoint(DI, 3, 1),
    )
    assert [p.coords for p in plan[3:7]] == [(2, 2), (2, 4), (4, 2), (4, 4)]
    assert all(p.kind is SQ for p in plan[3:7])
    assert [p.coords for p in plan[7:]] == [
        (1, 2),
        (2, 3),
        (3, 2),
        (2, 1),
        (1, 4),
        (3, 4),
        (4, 3),
        (4, 1),
    ]
    assert all(p.kind is DI for p in plan[7:])
    assert len(plan) == 15


def test_square_points_top_level():
    assert square_points(9, 9) == [(5, 5)]
    assert square_points(5, 9) == [(3, 3), (3, 7), (7, 3), (7, 7)]


def test_diamond_points_are_wrapped_and_unique():
    points = diamond_points(3, 9)
    assert len(points) == len(set(points))
    assert all(1 <= x <= 8 and 1 <= y <= 8 for x, y in points)


# ---------------------------------------------------------------------------
# Plan properties
# ---------------------------------------------------------------------------
def test_plan_covers_every_cell_but_the_seed_corner(grid_size):
    plan = plan_traversal(grid_size)
    interior = grid_size - 1
    coords = [p.coords for p in plan]

    assert len(plan) == interior**2 - 1
    assert len(set(coords)) == len(coords)
    assert (1, 1) not in coords
    every_cell = {(x, y) for x in range(1, interior + 1) for y in range(1, interior + 1)}
    assert set(coords) | {(1, 1)} == every_cell


def test_plan_orders_levels_and_squares_before_diamonds(grid_size):
    plan = plan_traversal(grid_size)
    expected: list[TraversalPoint] = []
    for _half, squares, diamonds in iter_levels(GridSize(value=grid_size)):
        expected.extend(TraversalPoint(SQ, x, y) for x, y in squares)
        expected.extend(TraversalPoint(DI, x, y) for x, y in diamonds)
    assert list(plan) == expected


def test_levels_halve_down_to_one(grid_size):
    halves = [half for half, _sq, _di in iter_levels(GridSize(value=grid_size))]
    assert halves[0] == (grid_size - 1) // 2
    assert halves[-1] == 1
    assert all(a == 2 * b for a, b in zip(halves, halves[1:]))
    assert len(halves) == GridSize(value=grid_size).levels


def test_plan_is_memoised():
    assert plan_traversal(17) is plan_traversal(GridSize(value=17))
