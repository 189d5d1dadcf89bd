"""Static artifacts built from a generated point cloud."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Sequence, Union

from .camera import ViewState, Viewport
from .color import hex_to_unit_rgb
from .projection import MIN_VISIBLE_RADIUS, ProjectionPipeline
from .surface import Point3D

LOGGER = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
OBJ_HEADER = "# Point Cloud OBJ Export"

PathLike = Union[str, Path]


def _fixed(value: float, digits: int) -> str:
    # Exact binary ties round away from zero; adding 0.0 folds negative zero.
    exact = Decimal(value + 0.0)
    return format(exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP), "f")


# //1.- Vector export: one circle per surviving point, farthest first so nearer circles occlude.
def render_svg(
    points: Sequence[Point3D],
    view: ViewState,
    viewport: Viewport,
    *,
    base_radius: float = 2.0,
    background: str = "#000000",
    transparent: bool = False,
    min_radius: float = MIN_VISIBLE_RADIUS,
) -> str:
    pipeline = ProjectionPipeline(view=view, viewport=viewport)
    ordered = pipeline.render_list(points, base_radius=base_radius, min_radius=min_radius)

    attributes = {
        "xmlns": SVG_NAMESPACE,
        "width": str(viewport.width),
        "height": str(viewport.height),
        "viewBox": f"0 0 {viewport.width} {viewport.height}",
    }
    if not transparent:
        attributes["style"] = f"background: {background};"
    svg = ET.Element("svg", attributes)
    if not transparent:
        ET.SubElement(svg, "rect", {"width": "100%", "height": "100%", "fill": background})

    group = ET.SubElement(svg, "g", {"id": "point-cloud"})
    for point in ordered:
        ET.SubElement(
            group,
            "circle",
            {
                "cx": _fixed(point.x, 2),
                "cy": _fixed(point.y, 2),
                "r": _fixed(point.radius, 2),
                "fill": point.color,
            },
        )

    LOGGER.debug("SVG document holds %d of %d points", len(ordered), len(points))
    return ET.tostring(svg, encoding="unicode")


# //2.- 3D model export: vertex-only OBJ carrying per-vertex colour.
def render_obj(points: Sequence[Point3D]) -> str:
    lines = [OBJ_HEADER]
    for point in points:
        red, green, blue = hex_to_unit_rgb(point.color)
        lines.append(
            "v "
            + " ".join(
                _fixed(value, 4)
                for value in (point.x, point.y, point.z, red, green, blue)
            )
        )
    return "\n".join(lines) + "\n"


def write_svg(path: PathLike, points: Sequence[Point3D], view: ViewState, viewport: Viewport, **options) -> Path:
    target = Path(path)
    target.write_text(render_svg(points, view, viewport, **options), encoding="utf-8")
    LOGGER.info("Wrote SVG export to %s", target)
    return target


def write_obj(path: PathLike, points: Sequence[Point3D]) -> Path:
    target = Path(path)
    target.write_text(render_obj(points), encoding="utf-8")
    LOGGER.info("Wrote OBJ export with %d vertices to %s", len(points), target)
    return target
