"""Domain Port(s) for Terrain I/O and Randomness.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import Heightfield, TerrainMesh


class NoiseSource(Protocol):
    """Port for the random perturbation added at every step.

    Implementations return an already-scaled, bounded value.
    """

    def perturbation(self) -> float: ...


class MeshRepository(Protocol):
    """Port for persisting triangulated terrain (e.g., Wavefront OBJ adapter)."""

    def save_mesh(self, mesh: TerrainMesh, file_path: Path | str) -> Path:
        """Write the mesh and return the path written."""
        ...


class HeightmapRepository(Protocol):
    """Port for storing and reloading raw heightfields (e.g., GeoTIFF adapter)."""

    def save_heightmap(self, field: Heightfield, file_path: Path | str) -> Path:
        """Write the heightfield and return the path written."""
        ...

    def load_heightmap(self, file_path: Path | str) -> Heightfield:
        """Load a previously saved heightfield."""
        ...
