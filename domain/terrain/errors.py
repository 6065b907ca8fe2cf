"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for terrain generation and export.

The generation engine raises:
- InvalidGridSizeError: recoverable input validation failure
- InternalIndexError: fatal, signals a broken traversal/wrap invariant
- HeightOverflowError: perturbations overflowed the float64 range
"""

from __future__ import annotations


class TerrainError(Exception):
    """Base error for terrain operations."""


# ---------------------------------------------------------------------------
# Generation Errors
# ---------------------------------------------------------------------------
class InvalidGridSizeError(TerrainError):
    """Grid size is not a power of two plus one (or is smaller than 3).

    Attributes:
        grid_size: The offending value, as given by the caller
    """

    def __init__(self, grid_size: object, reason: str | None = None) -> None:
        self.grid_size = grid_size
        message = f"grid_size must be a power of two, plus 1 (got {grid_size!r})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InternalIndexError(TerrainError):
    """Traversal produced a coordinate or step the height grid cannot honour.

    Unreachable for a validated grid size. Never catch and continue.
    """


class HeightOverflowError(TerrainError):
    """Generated heights left the finite float64 range.

    Raised when perturbations are large enough to overflow to infinity.
    """


# ---------------------------------------------------------------------------
# Heightmap / Mesh I/O Errors
# ---------------------------------------------------------------------------
class InvalidRasterError(TerrainError):
    """File is not a valid heightmap raster, wrong format, or corrupted."""


class InsufficientMemoryError(TerrainError):
    """Operation requires more memory than allowed or available."""


class MeshExportError(TerrainError):
    """Mesh could not be written to the requested destination."""
