"""Wavefront OBJ adapter for MeshRepository.

Writes a TerrainMesh as plain-text OBJ:

    v <x> <y> <height>        one line per vertex, x-major
    f <a>// <b>// <c>//       one line per triangle, 1-based indices

Faces carry empty texture/normal slots ("a//").
"""

from __future__ import annotations

import logging
from pathlib import Path

from domain.terrain.errors import MeshExportError
from domain.terrain.value_objects import TerrainMesh

logger = logging.getLogger(__name__)


class ObjMeshAdapter:
    """Infrastructure adapter for writing terrain meshes as OBJ text."""

    def save_mesh(self, mesh: TerrainMesh, file_path: Path | str) -> Path:
        """Write ``mesh`` to ``file_path`` and return the path.

        Raises:
            MeshExportError: Wrong suffix, symlink target, or missing parent
                directory
            OSError: Other write failures (logged, then re-raised)
        """
        path = Path(file_path)

        if path.suffix.lower() != ".obj":
            raise MeshExportError(f"Unsupported mesh extension: {path.suffix}")
        if path.is_symlink():
            raise MeshExportError("Symlinks are not permitted")
        if not path.parent.is_dir():
            raise MeshExportError(f"Output directory does not exist: {path.parent.name}")

        try:
            with path.open("w", encoding="ascii", newline="\n") as f:
                for x, y, z in mesh.vertices.tolist():
                    f.write(f"v {x!r} {y!r} {z!r}\n")
                for a, b, c in mesh.faces.tolist():
                    f.write(f"f {a}// {b}// {c}//\n")
        except OSError as e:
            # Log only filename and errno; callers decide what to surface
            logger.error(
                "Failed to write %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        logger.info(
            "Mesh %s: wrote %d vertices, %d faces",
            path.name,
            mesh.vertex_count,
            mesh.face_count,
        )
        return path
