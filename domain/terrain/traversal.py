"""Terrain Bounded Context - Traversal Planning.

Produces the order in which diamond-square visits every cell. Replaying a
plan front to back guarantees that each neighbour read by the step
evaluator has already been written, which is the only ordering guarantee
the generator relies on.

Ordering rules:
    1. Coarser levels are emitted in full before finer levels.
    2. Within a level, all square points precede all diamond points.
    3. Diamond points are wrapped onto the torus and emitted once each.

Cell (1, 1), which the four absolute corners alias to, is never emitted:
it is the zero-seeded boundary condition read by the first square step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import lru_cache
from numbers import Integral

from pydantic import ValidationError

from domain.terrain.coordinates import wrap_index
from domain.terrain.errors import InvalidGridSizeError
from domain.terrain.value_objects import GridSize, StepKind, TraversalPoint

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


# ---------------------------------------------------------------------------
# Grid Size Validation
# ---------------------------------------------------------------------------
def validate_grid_size(value: int | GridSize) -> GridSize:
    """Return a GridSize or raise InvalidGridSizeError.

    Accepts an existing GridSize unchanged. Booleans are rejected even
    though they are ints.
    """
    if isinstance(value, GridSize):
        return value
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidGridSizeError(value, "not an integer")
    try:
        return GridSize(value=int(value))
    except ValidationError as e:
        raise InvalidGridSizeError(value) from e


def is_valid_grid_size(value: object) -> bool:
    """Validation entry point for callers that only need yes/no."""
    try:
        validate_grid_size(value)  # type: ignore[arg-type]
    except InvalidGridSizeError:
        return False
    return True


# ---------------------------------------------------------------------------
# Per-level point sets
# ---------------------------------------------------------------------------
def _rectangle_corners(iteration_size: int, grid_size: int) -> Iterator[Coord]:
    """Top-left corners of the rectangles of one level."""
    stride = iteration_size - 1
    for x in range(1, grid_size, stride):
        for y in range(1, grid_size, stride):
            yield (x, y)


def square_points(iteration_size: int, grid_size: int) -> list[Coord]:
    """Centres of every rectangle of side iteration_size."""
    half = (iteration_size - 1) // 2
    return [
        (x + half, y + half) for x, y in _rectangle_corners(iteration_size, grid_size)
    ]


def diamond_points(iteration_size: int, grid_size: int) -> list[Coord]:
    """Wrapped edge midpoints of every rectangle of side iteration_size.

    Adjacent rectangles share edges, and on the torus the far edges alias
    the near ones, so the first occurrence of a wrapped pair wins.
    """
    half = (iteration_size - 1) // 2
    side = iteration_size - 1
    seen: set[Coord] = set()
    points: list[Coord] = []
    for x, y in _rectangle_corners(iteration_size, grid_size):
        for px, py in (
            (x, y + half),
            (x + half, y + side),
            (x + side, y + half),
            (x + half, y),
        ):
            point = (wrap_index(px, grid_size), wrap_index(py, grid_size))
            if point not in seen:
                seen.add(point)
                points.append(point)
    return points


def iter_levels(grid_size: GridSize) -> Iterator[tuple[int, list[Coord], list[Coord]]]:
    """Yield (half_width, square_points, diamond_points), coarsest level first."""
    size = grid_size.value
    iteration_size = size
    while iteration_size >= 3:
        half = (iteration_size - 1) // 2
        yield half, square_points(iteration_size, size), diamond_points(
            iteration_size, size
        )
        iteration_size = half + 1


# ---------------------------------------------------------------------------
# Main Service: plan_traversal
# ---------------------------------------------------------------------------
def plan_traversal(grid_size: int | GridSize) -> tuple[TraversalPoint, ...]:
    """Return the full traversal plan for a grid size.

    Plans are memoised per grid size; the returned tuple is shared and
    must be treated as immutable (it is).

    Raises:
        InvalidGridSizeError: If grid_size - 1 is not a power of two, or
            grid_size < 3
    """
    return _plan_for(validate_grid_size(grid_size).value)


@lru_cache(maxsize=16)
def _plan_for(size: int) -> tuple[TraversalPoint, ...]:
    plan: list[TraversalPoint] = []
    for half, squares, diamonds in iter_levels(GridSize(value=size)):
        plan.extend(TraversalPoint(StepKind.SQUARE, x, y) for x, y in squares)
        plan.extend(TraversalPoint(StepKind.DIAMOND, x, y) for x, y in diamonds)
        logger.debug(
            "Plan %d: level half=%d, %d square, %d diamond points",
            size,
            half,
            len(squares),
            len(diamonds),
        )
    return tuple(plan)
