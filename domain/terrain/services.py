"""Terrain Bounded Context - Domain Services.

Pure domain logic for terrain generation.
NO I/O operations - mesh and heightmap files are written by infrastructure
adapters under `src/infrastructure/terrain/` via domain ports.
"""

from __future__ import annotations

import logging

import numpy as np

from domain.terrain.coordinates import level_offset, wrap_index
from domain.terrain.errors import InternalIndexError
from domain.terrain.height_grid import HeightGrid
from domain.terrain.repositories import NoiseSource
from domain.terrain.traversal import plan_traversal, validate_grid_size
from domain.terrain.value_objects import (
    GridSize,
    Heightfield,
    StepKind,
    TerrainMesh,
    TraversalPoint,
)

logger = logging.getLogger(__name__)

Coord = tuple[int, int]
Neighbours = tuple[float, float, float, float]


# ---------------------------------------------------------------------------
# StepEvaluator: neighbour offsets
# ---------------------------------------------------------------------------
def neighbor_offset(point: TraversalPoint) -> int:
    """Half-width of the level a planned point belongs to.

    Square points sit at odd multiples of the half-width on both axes, so
    either coordinate gives the answer. Diamond points have one coordinate
    on a coarser grid line (possibly coordinate 1, which reports 0); the
    finer coordinate carries the level.

    Raises:
        InternalIndexError: If neither coordinate encodes a level, which
            only happens for the seeded corner (1, 1)
    """
    offsets = [o for o in (level_offset(point.x), level_offset(point.y)) if o]
    if not offsets:
        raise InternalIndexError(f"Point ({point.x}, {point.y}) has no level")
    return min(offsets)


def square_neighbor_coords(point: TraversalPoint, grid_size: int) -> tuple[Coord, ...]:
    """Wrapped [top-left, top-right, bottom-right, bottom-left] corners."""
    o = neighbor_offset(point)
    top = wrap_index(point.x - o, grid_size)
    bottom = wrap_index(point.x + o, grid_size)
    left = wrap_index(point.y - o, grid_size)
    right = wrap_index(point.y + o, grid_size)
    return ((top, left), (top, right), (bottom, right), (bottom, left))


def diamond_neighbor_coords(point: TraversalPoint, grid_size: int) -> tuple[Coord, ...]:
    """Wrapped [top, right, bottom, left] axis-aligned neighbours."""
    o = neighbor_offset(point)
    x, y = point.x, point.y
    return (
        (wrap_index(x - o, grid_size), wrap_index(y, grid_size)),
        (wrap_index(x, grid_size), wrap_index(y + o, grid_size)),
        (wrap_index(x + o, grid_size), wrap_index(y, grid_size)),
        (wrap_index(x, grid_size), wrap_index(y - o, grid_size)),
    )


def neighbor_coords(point: TraversalPoint, grid_size: int) -> tuple[Coord, ...]:
    """Dispatch on the point's step kind."""
    if point.kind is StepKind.SQUARE:
        return square_neighbor_coords(point, grid_size)
    if point.kind is StepKind.DIAMOND:
        return diamond_neighbor_coords(point, grid_size)
    raise InternalIndexError(f"Unknown step kind: {point.kind!r}")


# ---------------------------------------------------------------------------
# StepEvaluator: neighbour heights
# ---------------------------------------------------------------------------
def _heights(grid: HeightGrid, coords: tuple[Coord, ...]) -> Neighbours:
    a, b, c, d = (grid.height_at(x, y) for x, y in coords)
    return (a, b, c, d)


def square_neighbors(grid: HeightGrid, point: TraversalPoint) -> Neighbours:
    """Heights of the four corners feeding a square step."""
    return _heights(grid, square_neighbor_coords(point, grid.grid_size))


def diamond_neighbors(grid: HeightGrid, point: TraversalPoint) -> Neighbours:
    """Heights of the four axis neighbours feeding a diamond step."""
    return _heights(grid, diamond_neighbor_coords(point, grid.grid_size))


# ---------------------------------------------------------------------------
# Main Service: generate_terrain
# ---------------------------------------------------------------------------
def generate_terrain(grid_size: int | GridSize, noise: NoiseSource) -> Heightfield:
    """Run diamond-square over a zero-seeded toroidal grid.

    Every planned point receives the mean of its four neighbours plus one
    perturbation from ``noise``. Cell (1, 1) keeps its seed value of zero.
    Given the same sequence of perturbations the result is identical.

    Args:
        grid_size: 2**k + 1, k >= 1
        noise: Source of bounded perturbations, consumed once per point in
            plan order

    Returns:
        The finished grid as a read-only Heightfield

    Raises:
        InvalidGridSizeError: If grid_size is invalid
        InternalIndexError: If the plan yields a point the grid cannot
            honour (a logic defect, not an input problem)
        HeightOverflowError: If perturbations overflow a height to infinity

    Example:
        >>> from infrastructure.terrain.noise import UniformNoiseSource
        >>> field = generate_terrain(9, UniformNoiseSource(seed=42))
        >>> field.data.shape
        (8, 8)
    """
    size = validate_grid_size(grid_size)
    plan = plan_traversal(size)
    grid = HeightGrid(size)

    logger.debug(
        "Generating %dx%d terrain (%d points)", size.interior, size.interior, len(plan)
    )

    for point in plan:
        neighbours = _heights(grid, neighbor_coords(point, grid.grid_size))
        value = sum(neighbours) / 4.0 + noise.perturbation()
        grid.set_height(point.x, point.y, value)

    return grid.freeze()


# ---------------------------------------------------------------------------
# Mesh Building
# ---------------------------------------------------------------------------
def build_mesh(field: Heightfield) -> TerrainMesh:
    """Triangulate a heightfield over logical coordinates 1..grid_size.

    Vertices are emitted x-major (x outer, y inner), so vertex number
    (1-based) is (x - 1) * grid_size + y. The last row and column read the
    first row and column through the wrapper, so opposite edges carry equal
    heights. Each cell contributes two triangles, (top_left, bottom_left,
    top_right) and (top_right, bottom_left, bottom_right), with
    top_left = x + grid_size * (y - 1).
    """
    g = field.grid_size
    coords = np.arange(1, g + 1, dtype=np.float64)
    xs, ys = np.meshgrid(coords, coords, indexing="ij")
    vertices = np.column_stack((xs.ravel(), ys.ravel(), field.tiled().ravel()))

    cell = np.arange(1, g, dtype=np.int64)
    cx, cy = np.meshgrid(cell, cell, indexing="ij")
    top_left = (cx + g * (cy - 1)).ravel()
    bottom_left = top_left + g
    top_right = top_left + 1
    bottom_right = bottom_left + 1
    faces = np.empty((2 * len(top_left), 3), dtype=np.int64)
    faces[0::2] = np.column_stack((top_left, bottom_left, top_right))
    faces[1::2] = np.column_stack((top_right, bottom_left, bottom_right))

    return TerrainMesh(vertices=vertices, faces=faces)
