"""Offline raster preview of the cloud.

Draws the same back-to-front circle list as the vector export, so a PNG
rendered here lines up with the SVG for the same camera.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from PIL import Image, ImageDraw

from .camera import ViewState, Viewport
from .color import parse_hex_color
from .projection import MIN_VISIBLE_RADIUS, ProjectionPipeline
from .surface import Point3D

LOGGER = logging.getLogger(__name__)


def render_image(
    points: Sequence[Point3D],
    view: ViewState,
    viewport: Viewport,
    *,
    base_radius: float = 2.0,
    background: str = "#000000",
    transparent: bool = False,
    min_radius: float = MIN_VISIBLE_RADIUS,
) -> Image.Image:
    fill = (0, 0, 0, 0) if transparent else (*parse_hex_color(background), 255)
    image = Image.new("RGBA", (viewport.width, viewport.height), fill)
    draw = ImageDraw.Draw(image)

    pipeline = ProjectionPipeline(view=view, viewport=viewport)
    for point in pipeline.render_list(points, base_radius=base_radius, min_radius=min_radius):
        r = point.radius
        draw.ellipse(
            (point.x - r, point.y - r, point.x + r, point.y + r),
            fill=(*parse_hex_color(point.color), 255),
        )
    return image


def write_png(
    path: Union[str, Path],
    points: Sequence[Point3D],
    view: ViewState,
    viewport: Viewport,
    **options,
) -> Path:
    target = Path(path)
    render_image(points, view, viewport, **options).save(target, format="PNG")
    LOGGER.info("Wrote PNG preview to %s", target)
    return target
