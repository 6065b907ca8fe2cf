"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations: writing meshes as OBJ, storing heightmaps as GeoTIFF and
drawing perturbations from numpy.
"""

from .geotiff_adapter import GeoTiffHeightmapAdapter
from .noise import DEFAULT_NOISE_AMPLITUDE, UniformNoiseSource
from .obj_adapter import ObjMeshAdapter

__all__ = [
    "DEFAULT_NOISE_AMPLITUDE",
    "GeoTiffHeightmapAdapter",
    "ObjMeshAdapter",
    "UniformNoiseSource",
]
