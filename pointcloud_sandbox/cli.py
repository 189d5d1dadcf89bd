"""Command line interface for generating and exporting point clouds."""
from __future__ import annotations

import argparse
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .config import load_noise_seed
from .exporters import write_obj, write_svg
from .raster import write_png
from .settings import SceneSettings, load_scene_settings
from .surface import CloudBounds, ColorMode, GeometryMode, generate_surface

LOGGER = logging.getLogger(__name__)

EXPORT_FORMATS = ("svg", "obj", "png")


def non_negative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid number") from exc
    if not math.isfinite(parsed) or parsed < 0:
        raise argparse.ArgumentTypeError("Value must be a finite, non-negative number")
    return parsed


def non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Value must be non-negative")
    return parsed


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pointcloud-sandbox",
        description="Generate a point cloud from two profile curves and export it.",
    )
    parser.add_argument("--scene", help="Path to a JSON scene file (default: bundled scene).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")

    overrides = parser.add_argument_group("generation", "Overrides for the scene's generation section")
    overrides.add_argument("--density", type=non_negative_int, help="Samples per curve axis.")
    overrides.add_argument("--noise", type=non_negative_float, help="Jitter amount (0 disables).")
    overrides.add_argument("--mode", choices=[mode.value for mode in GeometryMode], help="Geometry mode.")
    overrides.add_argument("--color-mode", choices=[mode.value for mode in ColorMode], help="Colour mode.")
    overrides.add_argument("--seed", type=int, help="Noise seed (overrides POINTCLOUD_NOISE_SEED).")

    subcommands = parser.add_subparsers(dest="command", required=True)
    subcommands.add_parser("generate", help="Generate the cloud and print a bounds summary.")
    export = subcommands.add_parser("export", help="Write the cloud to a file.")
    export.add_argument("format", choices=EXPORT_FORMATS)
    export.add_argument("output", help="Destination file path.")
    return parser


def _apply_overrides(settings: SceneSettings, args: argparse.Namespace) -> SceneSettings:
    changes = {}
    if args.density is not None:
        changes["density"] = args.density
    if args.noise is not None:
        changes["noise"] = args.noise
    if args.mode is not None:
        changes["geometry_mode"] = GeometryMode(args.mode)
    if args.color_mode is not None:
        changes["color_mode"] = ColorMode(args.color_mode)
    if not changes:
        return settings
    return replace(settings, params=replace(settings.params, **changes))


def run(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )

    try:
        settings = _apply_overrides(load_scene_settings(args.scene), args)
        seed = load_noise_seed(args.seed, {"seed": settings.noise.value})
    except (OSError, ValueError) as exc:
        LOGGER.error("Could not load scene: %s", exc)
        return 2

    points = generate_surface(
        settings.vertical,
        settings.horizontal,
        settings.params,
        rng=seed.create_generator(),
    )
    bounds = CloudBounds.from_points(points)
    LOGGER.info("Generated cloud: %s", bounds.summary())

    if args.command == "generate":
        print(bounds.summary())
        return 0

    output = Path(args.output)
    if args.format == "obj":
        write_obj(output, points)
    elif args.format == "svg":
        write_svg(output, points, settings.view, settings.viewport, **settings.export.as_options())
    else:
        write_png(output, points, settings.view, settings.viewport, **settings.export.as_options())
    return 0


def main() -> int:
    """Console script entry point."""

    return run()


if __name__ == "__main__":  # pragma: no cover - exercised via ``python -m`` execution
    raise SystemExit(main())
