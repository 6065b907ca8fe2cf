"""Terrain Bounded Context - Toroidal Coordinates and Level Inference.

Pure integer arithmetic shared by the planner, the step evaluator and the
mesh builder. No numpy, no I/O.

Coordinate model:
    Logical coordinates are 1-based and unbounded. The physical grid holds
    grid_size - 1 cells per axis; logical coordinate grid_size aliases 1, so
    the last row and column of an exported terrain duplicate the first and
    the surface tiles seamlessly.
"""

from __future__ import annotations


def is_power_of_two(n: int) -> bool:
    """Return True for 1, 2, 4, 8, ... (zero and negatives are not)."""
    return n > 0 and n & (n - 1) == 0


# ---------------------------------------------------------------------------
# CoordinateWrapper
# ---------------------------------------------------------------------------
def wrap_index(index: int, grid_size: int) -> int:
    """Map any logical coordinate onto the physical range [1, grid_size - 1].

    A remainder of zero maps to grid_size - 1 rather than 0 so that indices
    stay 1-based: wrap_index(grid_size, g) == 1 and wrap_index(0, g) == g - 1.

    Python's % already returns a non-negative remainder for negative
    operands, so negative indices need no separate branch.

    Args:
        index: Logical coordinate, any integer
        grid_size: Side length including the duplicated last row/column

    Returns:
        Physical 1-based index
    """
    size_less_one = grid_size - 1
    remainder = index % size_less_one
    return remainder if remainder != 0 else size_less_one


# ---------------------------------------------------------------------------
# LevelInference
# ---------------------------------------------------------------------------
def level_offset(coordinate: int) -> int:
    """Return the subdivision half-width encoded by a 1-based coordinate.

    This is the largest power of two dividing coordinate - 1; when
    coordinate - 1 is itself a power of two the result is coordinate - 1.
    Coordinate 1 lies on the grid lines of every level and yields 0.

    Examples (grid_size 9):
        level_offset(5) == 4   # centre of the top-level rectangle
        level_offset(3) == 2
        level_offset(7) == 2   # 6 = 2 * 3
        level_offset(4) == 1

    Raises:
        ValueError: If coordinate < 1
    """
    if coordinate < 1:
        raise ValueError(f"coordinate must be >= 1, got {coordinate}")
    p = coordinate - 1
    # Lowest set bit == largest power-of-two divisor (0 for p == 0)
    return p & -p
