"""Point cloud sandbox package.

Generates coloured 3D point clouds from two editable Bézier profiles and
projects them through the same model-view-projection pipeline the live
viewport uses, so vector, model and raster exports match what is on
screen.
"""

from .spline import (
    ControlPoint,
    Handle,
    Spline,
    cubic_bezier,
    default_horizontal_shape,
    default_vertical_profile,
    sample_spline,
)
from .color import hex_to_unit_rgb, interpolate_color, is_hex_color, parse_hex_color
from .surface import (
    CloudBounds,
    ColorMode,
    GenerationParams,
    GeometryMode,
    Point3D,
    SurfaceGenerator,
    generate_surface,
)
from .matrix import Mat4
from .camera import ViewState, Viewport
from .projection import ProjectionPipeline, ScreenPoint, sort_back_to_front, visible_points
from .exporters import render_obj, render_svg, write_obj, write_svg
from .raster import render_image, write_png
from .config import NoiseSeed, load_noise_seed
from .settings import ExportSettings, SceneSettings, load_scene_settings

__all__ = [
    "ControlPoint",
    "Handle",
    "Spline",
    "cubic_bezier",
    "default_horizontal_shape",
    "default_vertical_profile",
    "sample_spline",
    "hex_to_unit_rgb",
    "interpolate_color",
    "is_hex_color",
    "parse_hex_color",
    "CloudBounds",
    "ColorMode",
    "GenerationParams",
    "GeometryMode",
    "Point3D",
    "SurfaceGenerator",
    "generate_surface",
    "Mat4",
    "ViewState",
    "Viewport",
    "ProjectionPipeline",
    "ScreenPoint",
    "sort_back_to_front",
    "visible_points",
    "render_obj",
    "render_svg",
    "write_obj",
    "write_svg",
    "render_image",
    "write_png",
    "NoiseSeed",
    "load_noise_seed",
    "ExportSettings",
    "SceneSettings",
    "load_scene_settings",
]
