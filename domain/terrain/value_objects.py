"""Terrain Bounded Context - Value Objects.

Immutable data structures for terrain generation and export.
Validation occurs at construction time via Pydantic, except for
TraversalPoint, which is a plain NamedTuple because plans hold one per
grid cell.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.coordinates import is_power_of_two, wrap_index

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
MIN_GRID_SIZE = 3  # 2**1 + 1, a single subdivision level


# ---------------------------------------------------------------------------
# GridSize
# ---------------------------------------------------------------------------
class GridSize(BaseModel):
    """Side length of a tileable terrain, 2**k + 1 with k >= 1 (Value Object).

    Invariants:
        GS-1: value >= 3
        GS-2: value - 1 is a power of two
    """

    value: int = Field(ge=MIN_GRID_SIZE)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_power_of_two(self) -> "GridSize":
        if not is_power_of_two(self.value - 1):
            raise ValueError(
                f"grid_size - 1 must be a power of two, got {self.value - 1}"
            )
        return self

    @property
    def interior(self) -> int:
        """Physical cells per axis (the last row/column is a duplicate)."""
        return self.value - 1

    @property
    def levels(self) -> int:
        """Number of subdivision levels, k in 2**k + 1."""
        return self.interior.bit_length() - 1

    def __int__(self) -> int:
        return self.value


# ---------------------------------------------------------------------------
# TraversalPoint
# ---------------------------------------------------------------------------
class StepKind(str, Enum):
    """Which averaging step computes a point."""

    SQUARE = "square"
    DIAMOND = "diamond"


class TraversalPoint(NamedTuple):
    """One step of a traversal plan: (kind, x, y) with 1-based coordinates."""

    kind: StepKind
    x: int
    y: int

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)


# ---------------------------------------------------------------------------
# Heightfield
# ---------------------------------------------------------------------------
class Heightfield(BaseModel):
    """Finished, read-only height grid handed from generation to export.

    The data array holds the (grid_size - 1) x (grid_size - 1) physical
    cells; row index is x - 1, column index is y - 1. It is copied and made
    non-writeable at construction time.
    """

    data: NDArray[np.float64]
    grid_size: int

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_field(self) -> "Heightfield":
        if self.grid_size < MIN_GRID_SIZE or not is_power_of_two(self.grid_size - 1):
            raise ValueError(
                f"grid_size - 1 must be a power of two >= 2, got {self.grid_size}"
            )
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        expected = (self.grid_size - 1, self.grid_size - 1)
        if self.data.shape != expected:
            raise ValueError(
                f"Data shape {self.data.shape} does not match grid_size "
                f"{self.grid_size} (expected {expected})"
            )
        if not np.isfinite(self.data).all():
            raise ValueError("Heights must be finite")

        immutable = np.array(self.data, dtype=np.float64, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)
        return self

    def height_at(self, x: int, y: int) -> float:
        """Height at any logical coordinate (wrapped onto the torus)."""
        row = wrap_index(x, self.grid_size) - 1
        col = wrap_index(y, self.grid_size) - 1
        return float(self.data[row, col])

    def tiled(self) -> NDArray[np.float64]:
        """Return the grid_size x grid_size logical array.

        The last row and column repeat the first, which is what makes
        neighbouring tiles meet without seams.
        """
        return np.pad(self.data, ((0, 1), (0, 1)), mode="wrap")


# ---------------------------------------------------------------------------
# TerrainMesh
# ---------------------------------------------------------------------------
class TerrainMesh(BaseModel):
    """Triangulated terrain surface (Value Object).

    Invariants:
        TM-1: vertices has shape (n, 3), float64
        TM-2: faces has shape (m, 3), 1-based indices into vertices
    """

    vertices: NDArray[np.float64]
    faces: NDArray[np.int64]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_mesh(self) -> "TerrainMesh":
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError(f"Vertices must be (n, 3), got {self.vertices.shape}")
        if self.faces.ndim != 2 or self.faces.shape[1] != 3:
            raise ValueError(f"Faces must be (m, 3), got {self.faces.shape}")
        if self.faces.size and (
            self.faces.min() < 1 or self.faces.max() > len(self.vertices)
        ):
            raise ValueError("Face indices must be 1-based vertex references")

        vertices = np.array(self.vertices, dtype=np.float64, copy=True)
        faces = np.array(self.faces, dtype=np.int64, copy=True)
        vertices.flags.writeable = False
        faces.flags.writeable = False
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "faces", faces)
        return self

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)
