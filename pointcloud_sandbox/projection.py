"""Model-view-projection pipeline shared by every renderer of the cloud.

Both the vector exporter and the raster preview go through
:class:`ProjectionPipeline`, so the screen-space geometry they produce is
the geometry the live viewport draws.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .camera import CAMERA_DISTANCE, ViewState, Viewport
from .matrix import Mat4
from .surface import Point3D

LOGGER = logging.getLogger(__name__)

MIN_VISIBLE_RADIUS = 0.1


@dataclass(frozen=True)
class ScreenPoint:
    """A projected point ready to be drawn.

    ``depth`` is the normalized device depth in ``[0, 1]`` (larger is
    farther), ``index`` the position of the source point in the cloud.
    """

    x: float
    y: float
    depth: float
    w: float
    radius: float
    color: str
    index: int


@dataclass(frozen=True)
class ProjectionPipeline:
    view: ViewState
    viewport: Viewport

    def model_matrix(self) -> Mat4:
        return Mat4.rotation_x(self.view.angle_x) @ Mat4.rotation_y(self.view.angle_y)

    def view_matrix(self) -> Mat4:
        return Mat4.translation(self.view.offset_x, self.view.offset_y, -self.view.distance)

    def projection_matrix(self) -> Mat4:
        return Mat4.perspective(
            self.view.field_of_view,
            self.viewport.aspect,
            self.view.near,
            self.view.far,
        )

    def mvp(self) -> Mat4:
        return self.projection_matrix() @ self.view_matrix() @ self.model_matrix()

    def project(self, points: Sequence[Point3D], base_radius: float = 1.0) -> List[ScreenPoint]:
        """Project points to pixels, dropping anything with ``w == 0`` or outside the depth range.

        Survivors keep generation order.
        """

        if not points:
            return []
        homogeneous = np.array([(p.x, p.y, p.z, 1.0) for p in points], dtype=float)
        clip = homogeneous @ self.mvp().to_array().T
        w = clip[:, 3]
        keep = w != 0.0
        safe_w = np.where(keep, w, 1.0)
        ndc = clip[:, :3] / safe_w[:, None]
        keep &= (ndc[:, 2] >= 0.0) & (ndc[:, 2] <= 1.0)

        width = float(self.viewport.width)
        height = float(self.viewport.height)
        screen_x = (ndc[:, 0] * 0.5 + 0.5) * width
        screen_y = (1.0 - (ndc[:, 1] * 0.5 + 0.5)) * height
        radius = (CAMERA_DISTANCE / safe_w) * base_radius

        projected = [
            ScreenPoint(
                x=float(screen_x[i]),
                y=float(screen_y[i]),
                depth=float(ndc[i, 2]),
                w=float(w[i]),
                radius=float(radius[i]),
                color=points[i].color,
                index=int(i),
            )
            for i in np.flatnonzero(keep)
        ]
        LOGGER.debug("Projected %d of %d points", len(projected), len(points))
        return projected

    def render_list(
        self,
        points: Sequence[Point3D],
        base_radius: float = 1.0,
        min_radius: float = MIN_VISIBLE_RADIUS,
    ) -> List[ScreenPoint]:
        """Projected, visible points in back-to-front draw order."""

        return visible_points(sort_back_to_front(self.project(points, base_radius)), min_radius)


def sort_back_to_front(points: Sequence[ScreenPoint]) -> List[ScreenPoint]:
    """Order by descending depth; equal depths keep their incoming order."""

    return sorted(points, key=lambda point: -point.depth)


def visible_points(points: Sequence[ScreenPoint], min_radius: float = MIN_VISIBLE_RADIUS) -> List[ScreenPoint]:
    return [point for point in points if point.radius >= min_radius]
