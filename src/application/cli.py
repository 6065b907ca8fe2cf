"""Command-line entry point.

Usage:
    diamond-terrain GRID_SIZE [-o out.obj] [--heightmap out.tif]
                    [--seed N] [--amplitude A] [-v]

GRID_SIZE must be a power of two, plus 1 (3, 5, 9, 17, ...). The mesh
tiles seamlessly: its last row and column repeat the first.

Exit status: 0 on success, 1 when writing output fails, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from application.settings import GenerationSettings
from application.terrain_service import generate_and_export
from domain.terrain.errors import TerrainError
from domain.terrain.traversal import is_valid_grid_size
from infrastructure.terrain.geotiff_adapter import GeoTiffHeightmapAdapter
from infrastructure.terrain.noise import DEFAULT_NOISE_AMPLITUDE
from infrastructure.terrain.obj_adapter import ObjMeshAdapter

logger = logging.getLogger(__name__)

GRID_SIZE_HELP = "GRID_SIZE must be a power of two, plus 1"


def _grid_size_arg(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{GRID_SIZE_HELP} (got {text!r})") from None
    if not is_valid_grid_size(value):
        raise argparse.ArgumentTypeError(f"{GRID_SIZE_HELP} (got {value})")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diamond-terrain",
        description="Generate tileable diamond-square terrain as an OBJ mesh.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "grid_size", metavar="GRID_SIZE", type=_grid_size_arg, help=GRID_SIZE_HELP
    )
    parser.add_argument(
        "-o", "--output", default="out.obj", help="OBJ mesh path (default: out.obj)"
    )
    parser.add_argument("--heightmap", help="Also write the raw heights as GeoTIFF")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--amplitude",
        type=float,
        default=DEFAULT_NOISE_AMPLITUDE,
        help=f"Perturbation bound per step (default: {DEFAULT_NOISE_AMPLITUDE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = GenerationSettings(
            grid_size=args.grid_size, noise_amplitude=args.amplitude, seed=args.seed
        )
    except ValidationError as e:
        parser.error(str(e))

    try:
        generate_and_export(
            settings,
            ObjMeshAdapter(),
            args.output,
            heightmap_repository=GeoTiffHeightmapAdapter() if args.heightmap else None,
            heightmap_path=args.heightmap,
        )
    except (TerrainError, OSError) as e:
        logger.error("Export failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
