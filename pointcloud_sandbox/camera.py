"""Orbit camera snapshot consumed by the projection pipeline."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

CAMERA_DISTANCE = 1000.0
DEFAULT_FIELD_OF_VIEW = math.radians(60.0)


@dataclass(frozen=True)
class ViewState:
    angle_x: float = 0.0
    angle_y: float = 0.0
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    field_of_view: float = DEFAULT_FIELD_OF_VIEW
    near: float = 0.1
    far: float = 10000.0

    def __post_init__(self) -> None:
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")
        if not 0 < self.near < self.far:
            raise ValueError(f"near/far must satisfy 0 < near < far, got {self.near}/{self.far}")
        if not 0 < self.field_of_view < math.pi:
            raise ValueError("field_of_view must lie strictly between 0 and pi radians")

    @property
    def distance(self) -> float:
        return CAMERA_DISTANCE / self.zoom

    def orbit(self, delta_x: float, delta_y: float) -> "ViewState":
        return replace(self, angle_x=self.angle_x + delta_x, angle_y=self.angle_y + delta_y)

    def pan(self, delta_x: float, delta_y: float) -> "ViewState":
        return replace(self, offset_x=self.offset_x + delta_x, offset_y=self.offset_y + delta_y)

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> "ViewState":
        fov_degrees = payload.get("field_of_view_deg")
        return ViewState(
            angle_x=float(payload.get("angle_x", 0.0)),
            angle_y=float(payload.get("angle_y", 0.0)),
            zoom=float(payload.get("zoom", 1.0)),
            offset_x=float(payload.get("offset_x", 0.0)),
            offset_y=float(payload.get("offset_y", 0.0)),
            field_of_view=(
                math.radians(float(fov_degrees)) if fov_degrees is not None else DEFAULT_FIELD_OF_VIEW
            ),
            near=float(payload.get("near", 0.1)),
            far=float(payload.get("far", 10000.0)),
        )


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")

    @property
    def aspect(self) -> float:
        return self.width / self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2.0, self.height / 2.0
