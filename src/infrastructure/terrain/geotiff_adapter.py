"""GeoTIFF adapter for HeightmapRepository.

Stores a Heightfield's physical cells as a single-band float64 GeoTIFF and
loads it back. The raster has no CRS. Rows hold logical x and columns hold
logical y. The pixel-centre transform maps pixel (row r, col c) to
georeferenced (c + 1, r + 1), which is logical (y, x): the raster x axis
runs along logical y. The grid size is also kept as a dataset tag.

Load lifecycle (to avoid resource leaks):
1) Pre-flight checks on the path (existence, extension, symlink, size)
2) Open dataset with context manager inside rasterio.Env
3) Validate band count, memory budget and square power-of-two shape
4) Read as float64, reject non-finite heights
5) Exit contexts to release GDAL handles
6) Return Heightfield
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import rasterio
from affine import Affine

from domain.terrain.coordinates import is_power_of_two
from domain.terrain.errors import InsufficientMemoryError, InvalidRasterError
from domain.terrain.value_objects import Heightfield

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

# Pixel (row r, col c) centre lands on georeferenced (c + 1, r + 1)
_PIXEL_CENTRE_TRANSFORM = Affine.translation(0.5, 0.5)

GRID_SIZE_TAG = "GRID_SIZE"
_ALLOWED_SUFFIXES = (".tif", ".tiff")


class GeoTiffHeightmapAdapter:
    """Infrastructure adapter for heightmap GeoTIFFs.

    Parameters
    ----------
    max_bytes: int | None
        Optional memory budget for the loaded float64 grid (height*width*8).
        Exceeding it raises InsufficientMemoryError before any allocation.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self.max_bytes = max_bytes

    def save_heightmap(self, field: Heightfield, file_path: Path | str) -> Path:
        """Write ``field`` as a single-band float64 GeoTIFF."""
        path = Path(file_path)
        if path.suffix.lower() not in _ALLOWED_SUFFIXES:
            raise InvalidRasterError(f"Unsupported file extension: {path.suffix}")
        if path.is_symlink():
            raise InvalidRasterError("Symlinks are not permitted")

        height, width = field.data.shape
        with rasterio.Env():
            with rasterio.open(
                path,
                "w",
                driver="GTiff",
                height=height,
                width=width,
                count=1,
                dtype="float64",
                transform=_PIXEL_CENTRE_TRANSFORM,
            ) as dst:
                # GDAL wants a writeable buffer; the Heightfield array is frozen
                dst.write(field.data.copy(), 1)
                dst.update_tags(**{GRID_SIZE_TAG: str(field.grid_size)})

        logger.info("Heightmap %s: wrote %dx%d grid", path.name, width, height)
        return path

    def load_heightmap(self, file_path: Path | str) -> Heightfield:
        """Load a heightmap GeoTIFF written by ``save_heightmap``.

        Raises:
            FileNotFoundError: Path does not exist
            InvalidRasterError: Wrong extension, symlink, empty or corrupted
                file, not exactly one band, non-square or non power-of-two
                shape, grid-size tag mismatch, non-finite heights
            InsufficientMemoryError: Grid exceeds ``max_bytes``
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() not in _ALLOWED_SUFFIXES:
            raise InvalidRasterError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise InvalidRasterError("Symlinks are not permitted")
            st = path.stat()
            if st.st_size == 0:
                raise InvalidRasterError("Empty file")
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to stat %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            with rasterio.Env():
                with rasterio.open(path) as src:
                    if src.count != 1:
                        raise InvalidRasterError(f"Expected 1 band, got {src.count}")

                    height, width = src.height, src.width
                    if height != width:
                        raise InvalidRasterError(
                            f"Heightmap must be square, got {height}x{width}"
                        )
                    if not is_power_of_two(width) or width < 2:
                        raise InvalidRasterError(
                            f"Heightmap side must be a power of two >= 2, got {width}"
                        )
                    grid_size = width + 1

                    tagged = src.tags().get(GRID_SIZE_TAG)
                    if tagged is not None and tagged != str(grid_size):
                        raise InvalidRasterError(
                            f"{GRID_SIZE_TAG} tag {tagged} does not match "
                            f"{width}x{height} raster"
                        )

                    if self.max_bytes is not None:
                        est_bytes = width * height * 8  # float64 = 8 bytes
                        if est_bytes > self.max_bytes:
                            raise InsufficientMemoryError(
                                f"Estimated grid size {est_bytes}B exceeds budget {self.max_bytes}B"
                            )

                    data = src.read(1, out_dtype="float64")

            if not np.isfinite(data).all():
                raise InvalidRasterError("Heightmap contains non-finite heights")

            field = Heightfield(data=data, grid_size=grid_size)

        except PermissionError as e:
            # Re-raise with filename only to avoid leaking full path in logs
            raise PermissionError(path.name) from e
        except (rasterio.errors.RasterioIOError, rasterio.errors.RasterioError) as e:
            raise InvalidRasterError(f"Corrupted or invalid raster: {e}") from e
        except MemoryError as e:
            raise InsufficientMemoryError("Insufficient memory to load raster") from e

        logger.debug("Heightmap %s: Loaded %dx%d grid", path.name, width, height)
        return field
