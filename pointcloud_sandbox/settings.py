"""Structured loader for scene settings."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .camera import ViewState, Viewport
from .color import is_hex_color
from .config import NoiseSeed
from .projection import MIN_VISIBLE_RADIUS
from .spline import Spline, default_horizontal_shape, default_vertical_profile
from .surface import GenerationParams

LOGGER = logging.getLogger(__name__)

SCENE_FILENAME = "scene.json"


# //1.- Options shared by the vector and raster exporters.
@dataclass(frozen=True)
class ExportSettings:
    base_radius: float = 2.0
    background: str = "#000000"
    transparent: bool = False
    min_radius: float = MIN_VISIBLE_RADIUS

    def __post_init__(self) -> None:
        if self.base_radius <= 0:
            raise ValueError("base_radius must be positive")
        if not is_hex_color(self.background):
            raise ValueError(f"background must be a '#rrggbb' string, got {self.background!r}")

    def as_options(self) -> Dict[str, Any]:
        return {
            "base_radius": self.base_radius,
            "background": self.background,
            "transparent": self.transparent,
            "min_radius": self.min_radius,
        }


# //2.- Aggregate everything needed to generate and export one scene.
@dataclass(frozen=True)
class SceneSettings:
    vertical: Spline = field(default_factory=default_vertical_profile)
    horizontal: Spline = field(default_factory=default_horizontal_shape)
    params: GenerationParams = field(default_factory=GenerationParams)
    view: ViewState = field(default_factory=ViewState)
    viewport: Viewport = field(default_factory=lambda: Viewport(800, 600))
    export: ExportSettings = field(default_factory=ExportSettings)
    noise: NoiseSeed = field(default_factory=NoiseSeed)


# //3.- Resolve the bundled scene directory next to the package.
def _default_scene_directory() -> str:
    return os.path.join(os.path.dirname(__file__), "scenes")


# //4.- Load a single JSON configuration file and coerce to dictionary.
def _read_json_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Scene file '{path}' must contain a JSON object")
    return payload


# //5.- Reject sections that are present but not JSON objects.
def _section(payload: dict, name: str) -> dict:
    section = payload.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"section '{name}' must be a JSON object, got {type(section).__name__}")
    return section


# //6.- Curves fall back to the editor defaults when a section is missing.
def _load_curves(payload: dict) -> tuple[Spline, Spline]:
    curves = _section(payload, "curves")
    vertical = Spline.from_dicts(curves["vertical"]) if "vertical" in curves else default_vertical_profile()
    horizontal = (
        Spline.from_dicts(curves["horizontal"]) if "horizontal" in curves else default_horizontal_shape()
    )
    return vertical, horizontal


def _load_generation_params(payload: dict) -> GenerationParams:
    section = _section(payload, "generation")
    defaults = GenerationParams()
    return GenerationParams(
        density=section.get("density", defaults.density),
        height=float(section.get("height", defaults.height)),
        color=str(section.get("color", defaults.color)),
        color2=str(section.get("color2", defaults.color2)),
        color_mode=str(section.get("color_mode", defaults.color_mode.value)).strip().lower(),
        noise=float(section.get("noise", defaults.noise)),
        grid_width=float(section.get("grid_width", defaults.grid_width)),
        grid_depth=float(section.get("grid_depth", defaults.grid_depth)),
        geometry_mode=str(section.get("geometry_mode", defaults.geometry_mode.value)).strip().lower(),
    )


def _load_viewport(payload: dict) -> Viewport:
    section = _section(payload, "viewport")
    return Viewport(width=int(section.get("width", 800)), height=int(section.get("height", 600)))


def _load_export_settings(payload: dict) -> ExportSettings:
    section = _section(payload, "export")
    defaults = ExportSettings()
    return ExportSettings(
        base_radius=float(section.get("base_radius", defaults.base_radius)),
        background=str(section.get("background", defaults.background)),
        transparent=bool(section.get("transparent", defaults.transparent)),
        min_radius=float(section.get("min_radius", defaults.min_radius)),
    )


# //7.- Public helper assembling the full scene bundle.
def load_scene_settings(path: Optional[str] = None) -> SceneSettings:
    target = path or os.path.join(_default_scene_directory(), SCENE_FILENAME)
    payload = _read_json_config(target)
    try:
        vertical, horizontal = _load_curves(payload)
        settings = SceneSettings(
            vertical=vertical,
            horizontal=horizontal,
            params=_load_generation_params(payload),
            view=ViewState.from_mapping(_section(payload, "view")),
            viewport=_load_viewport(payload),
            export=_load_export_settings(payload),
            noise=NoiseSeed.from_mapping(_section(payload, "noise")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid scene settings in '{target}': {exc}") from exc
    LOGGER.debug("Loaded scene settings from %s", target)
    return settings
