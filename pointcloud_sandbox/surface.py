"""Point cloud synthesis from a vertical profile and a horizontal shape."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence

import numpy as np

from .color import interpolate_color, is_hex_color
from .spline import Spline, sample_spline

LOGGER = logging.getLogger(__name__)

NOISE_SCALE = 20.0


class GeometryMode(str, Enum):
    SWEEP = "sweep"
    REVOLUTION = "revolution"
    SHEET = "sheet"


class ColorMode(str, Enum):
    SOLID = "solid"
    HEIGHT = "height"
    DEPTH = "depth"


class RandomSource(Protocol):
    def random(self) -> float:
        ...


# //1.- Immutable bundle of every knob that shapes a single generation call.
@dataclass(frozen=True)
class GenerationParams:
    density: int = 50
    height: float = 1.0
    color: str = "#00ffcc"
    color2: str = "#ff00ff"
    color_mode: ColorMode = ColorMode.SOLID
    noise: float = 0.0
    grid_width: float = 400.0
    grid_depth: float = 400.0
    geometry_mode: GeometryMode = GeometryMode.SWEEP

    # //2.- Validate preconditions up front so the sampling loop never sees bad input.
    def __post_init__(self) -> None:
        if isinstance(self.density, bool) or not isinstance(self.density, int):
            raise ValueError(f"density must be an integer, got {self.density!r}")
        if self.density < 0:
            raise ValueError(f"density must be non-negative, got {self.density}")
        if not math.isfinite(self.height):
            raise ValueError(f"height must be finite, got {self.height}")
        if not math.isfinite(self.noise) or self.noise < 0:
            raise ValueError(f"noise must be finite and non-negative, got {self.noise}")
        for name in ("grid_width", "grid_depth"):
            extent = getattr(self, name)
            if not math.isfinite(extent) or extent <= 0:
                raise ValueError(f"{name} must be finite and positive, got {extent}")
        for name in ("color", "color2"):
            if not is_hex_color(getattr(self, name)):
                raise ValueError(f"{name} must be a '#rrggbb' string, got {getattr(self, name)!r}")
        try:
            object.__setattr__(self, "color_mode", ColorMode(self.color_mode))
            object.__setattr__(self, "geometry_mode", GeometryMode(self.geometry_mode))
        except ValueError as exc:
            raise ValueError(f"Unsupported mode: {exc}") from exc

    @property
    def point_count(self) -> int:
        return (self.density + 1) ** 2


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float
    color: str


# //3.- Axis-aligned extent of a cloud, used for logging and CLI summaries.
@dataclass(frozen=True)
class CloudBounds:
    count: int
    minimum: tuple[float, float, float]
    maximum: tuple[float, float, float]

    @classmethod
    def from_points(cls, points: Sequence[Point3D]) -> "CloudBounds":
        if not points:
            return cls(count=0, minimum=(0.0, 0.0, 0.0), maximum=(0.0, 0.0, 0.0))
        coords = np.array([(p.x, p.y, p.z) for p in points], dtype=float)
        lo = coords.min(axis=0)
        hi = coords.max(axis=0)
        return cls(
            count=len(points),
            minimum=(float(lo[0]), float(lo[1]), float(lo[2])),
            maximum=(float(hi[0]), float(hi[1]), float(hi[2])),
        )

    def summary(self) -> str:
        return (
            f"points={self.count}, "
            f"x=({self.minimum[0]:.2f}, {self.maximum[0]:.2f}), "
            f"y=({self.minimum[1]:.2f}, {self.maximum[1]:.2f}), "
            f"z=({self.minimum[2]:.2f}, {self.maximum[2]:.2f})"
        )


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


# //4.- Combine the two profile samples into a position for the selected geometry mode.
def _position(
    u: float,
    v: float,
    v_radius: float,
    v_height: float,
    horizontal: Spline,
    params: GenerationParams,
) -> tuple[float, float, float]:
    half_width = params.grid_width / 2.0
    if params.geometry_mode is GeometryMode.REVOLUTION:
        angle = u * math.pi * 2.0
        radius = half_width * v_radius
        return (
            math.cos(angle) * radius,
            -(v_height * params.height * half_width),
            math.sin(angle) * radius,
        )
    if params.geometry_mode is GeometryMode.SHEET:
        h_height = sample_spline(u, horizontal, "y")
        return (
            (u - 0.5) * params.grid_width,
            -((v_height + h_height) * params.height * half_width),
            (v - 0.5) * params.grid_depth,
        )
    raw_x = sample_spline(u, horizontal, "x")
    raw_z = sample_spline(u, horizontal, "y")
    return (
        (raw_x - 0.5) * params.grid_width * v_radius,
        -(v_height * params.height * half_width),
        (raw_z - 0.5) * params.grid_depth * v_radius,
    )


# //5.- Resolve the colour of one point from the configured colour mode.
def _point_color(v_height: float, z: float, params: GenerationParams) -> str:
    if params.color_mode is ColorMode.HEIGHT:
        return interpolate_color(params.color, params.color2, v_height)
    if params.color_mode is ColorMode.DEPTH:
        factor = _clamp01((z + params.grid_depth / 2.0) / params.grid_depth)
        return interpolate_color(params.color, params.color2, factor)
    return params.color


def generate_surface(
    vertical: Spline,
    horizontal: Spline,
    params: GenerationParams,
    rng: Optional[RandomSource] = None,
) -> List[Point3D]:
    """Generate ``(density + 1) ** 2`` coloured points in row-major order.

    The outer loop walks the vertical parameter, the inner loop the
    horizontal one. ``rng`` supplies jitter when ``params.noise`` is
    positive; any object exposing ``random()`` works, including
    ``numpy.random.Generator`` and ``random.Random``.
    """

    steps = params.density
    jitter = params.noise * NOISE_SCALE
    if jitter > 0 and rng is None:
        rng = np.random.default_rng()

    points: List[Point3D] = []
    for i in range(steps + 1):
        v = i / steps if steps else 0.0
        v_radius = sample_spline(v, vertical, "x")
        v_height = sample_spline(v, vertical, "y")
        for j in range(steps + 1):
            u = j / steps if steps else 0.0
            x, y, z = _position(u, v, v_radius, v_height, horizontal, params)
            if jitter > 0:
                x += (rng.random() - 0.5) * jitter
                y += (rng.random() - 0.5) * jitter
                z += (rng.random() - 0.5) * jitter
            points.append(Point3D(x=x, y=y, z=z, color=_point_color(v_height, z, params)))

    LOGGER.debug(
        "Generated %d points (mode=%s, density=%d, noise=%.3f)",
        len(points),
        params.geometry_mode.value,
        params.density,
        params.noise,
    )
    return points


# //6.- Stateful wrapper holding the latest cloud for renderers that redraw every frame.
class SurfaceGenerator:
    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self._rng = rng
        self.points: List[Point3D] = []

    def generate(self, vertical: Spline, horizontal: Spline, params: GenerationParams) -> List[Point3D]:
        self.points = generate_surface(vertical, horizontal, params, rng=self._rng)
        return self.points

    def bounds(self) -> CloudBounds:
        return CloudBounds.from_points(self.points)
