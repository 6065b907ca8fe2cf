"""Application service: generate a terrain and hand it to the exporters."""

from __future__ import annotations

import logging
from pathlib import Path

from application.settings import GenerationSettings
from domain.terrain.repositories import HeightmapRepository, MeshRepository, NoiseSource
from domain.terrain.services import build_mesh, generate_terrain
from domain.terrain.value_objects import Heightfield
from infrastructure.terrain.noise import UniformNoiseSource

logger = logging.getLogger(__name__)


def generate_and_export(
    settings: GenerationSettings,
    mesh_repository: MeshRepository,
    mesh_path: Path | str,
    heightmap_repository: HeightmapRepository | None = None,
    heightmap_path: Path | str | None = None,
    noise: NoiseSource | None = None,
) -> Heightfield:
    """Generate terrain per ``settings``, write the mesh, optionally the heightmap.

    ``noise`` overrides the seeded uniform source built from ``settings``.
    """
    if (heightmap_repository is None) != (heightmap_path is None):
        raise ValueError("heightmap_repository and heightmap_path go together")

    if noise is None:
        noise = UniformNoiseSource(amplitude=settings.noise_amplitude, seed=settings.seed)

    field = generate_terrain(settings.grid_size, noise)
    mesh_repository.save_mesh(build_mesh(field), mesh_path)
    if heightmap_repository is not None and heightmap_path is not None:
        heightmap_repository.save_heightmap(field, heightmap_path)

    logger.debug(
        "Terrain %d (seed=%s): min=%.4f max=%.4f",
        settings.grid_size,
        settings.seed,
        float(field.data.min()),
        float(field.data.max()),
    )
    return field
