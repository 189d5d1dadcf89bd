"""Composite cubic Bézier splines used as profile curves.

Each spline is an ordered run of anchors living in normalized ``[0, 1]``
curve space. Anchors carry optional tangent handles expressed as offsets
from the anchor position; the outgoing handle of one anchor and the
incoming handle of the next form the inner control points of the cubic
segment between them. The x and y axes are evaluated independently so a
single spline yields two scalar curves over the global parameter ``t``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

AXES = ("x", "y")


@dataclass(frozen=True)
class Handle:
    """Tangent handle stored as an offset from its anchor."""

    dx: float = 0.0
    dy: float = 0.0

    def __neg__(self) -> "Handle":
        return Handle(-self.dx, -self.dy)

    def component(self, axis: str) -> float:
        return self.dx if axis == "x" else self.dy


@dataclass(frozen=True)
class ControlPoint:
    """Spline anchor with optional incoming (``cp1``) and outgoing (``cp2``) handles."""

    x: float
    y: float
    cp1: Optional[Handle] = None
    cp2: Optional[Handle] = None

    def value(self, axis: str) -> float:
        if axis not in AXES:
            raise ValueError(f"Unknown spline axis '{axis}'")
        return self.x if axis == "x" else self.y

    def incoming(self, axis: str) -> float:
        return self.cp1.component(axis) if self.cp1 is not None else 0.0

    def outgoing(self, axis: str) -> float:
        return self.cp2.component(axis) if self.cp2 is not None else 0.0

    def with_cp1(self, handle: Handle, *, mirror: bool = True) -> "ControlPoint":
        """Return a copy with a new incoming handle, mirroring the outgoing one."""

        if mirror:
            return replace(self, cp1=handle, cp2=-handle)
        return replace(self, cp1=handle)

    def with_cp2(self, handle: Handle, *, mirror: bool = True) -> "ControlPoint":
        """Return a copy with a new outgoing handle, mirroring the incoming one."""

        if mirror:
            return replace(self, cp1=-handle, cp2=handle)
        return replace(self, cp2=handle)

    def is_mirrored(self, tolerance: float = 1e-9) -> bool:
        incoming = self.cp1 or Handle()
        outgoing = self.cp2 or Handle()
        return (
            abs(incoming.dx + outgoing.dx) <= tolerance
            and abs(incoming.dy + outgoing.dy) <= tolerance
        )

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> "ControlPoint":
        def _handle(raw: Any) -> Optional[Handle]:
            if raw is None:
                return None
            if not isinstance(raw, Mapping):
                raise ValueError(f"handle must be an object with dx/dy, got {raw!r}")
            return Handle(float(raw.get("dx", 0.0)), float(raw.get("dy", 0.0)))

        return ControlPoint(
            x=float(payload["x"]),
            y=float(payload["y"]),
            cp1=_handle(payload.get("cp1")),
            cp2=_handle(payload.get("cp2")),
        )

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"x": self.x, "y": self.y}
        if self.cp1 is not None:
            payload["cp1"] = {"dx": self.cp1.dx, "dy": self.cp1.dy}
        if self.cp2 is not None:
            payload["cp2"] = {"dx": self.cp2.dx, "dy": self.cp2.dy}
        return payload


@dataclass(frozen=True)
class Spline:
    """Ordered anchors defining one profile curve.

    The generation core treats splines as read-only input. Editing helpers
    return new splines so the curve editor can swap them in atomically.
    """

    points: Tuple[ControlPoint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def segment_count(self) -> int:
        return max(0, len(self.points) - 1)

    def is_interior(self, index: int) -> bool:
        return 0 < index < len(self.points) - 1

    def with_handle(self, index: int, which: str, handle: Handle) -> "Spline":
        """Return a spline with one handle replaced.

        Interior anchors always receive mirrored handles so the curve keeps a
        continuous first derivative through them. Endpoint handles are set
        independently.
        """

        if which not in ("cp1", "cp2"):
            raise ValueError(f"Unknown handle '{which}', expected 'cp1' or 'cp2'")
        anchor = self.points[index]
        mirror = self.is_interior(index)
        if which == "cp1":
            updated = anchor.with_cp1(handle, mirror=mirror)
        else:
            updated = anchor.with_cp2(handle, mirror=mirror)
        points = list(self.points)
        points[index] = updated
        return Spline(tuple(points))

    def with_anchor(self, index: int, x: float, y: float) -> "Spline":
        """Move an anchor while its handles travel along with it."""

        points = list(self.points)
        points[index] = replace(points[index], x=float(x), y=float(y))
        return Spline(tuple(points))

    def is_smooth(self) -> bool:
        return all(
            self.points[index].is_mirrored()
            for index in range(1, len(self.points) - 1)
        )

    def sample(self, t: float, axis: str) -> float:
        return sample_spline(t, self, axis)

    @staticmethod
    def from_dicts(entries: Iterable[Mapping[str, Any]]) -> "Spline":
        return Spline(tuple(ControlPoint.from_mapping(entry) for entry in entries))

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [point.to_mapping() for point in self.points]


def cubic_bezier(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Evaluate a scalar cubic Bézier in Bernstein form.

    ``t`` is not clamped: values outside ``[0, 1]`` follow the same
    polynomial.
    """

    mt = 1.0 - t
    return (
        mt * mt * mt * p0
        + 3.0 * mt * mt * t * p1
        + 3.0 * mt * t * t * p2
        + t * t * t * p3
    )


def sample_spline(
    t: float,
    spline: Union[Spline, Sequence[ControlPoint]],
    axis: str,
) -> float:
    """Sample one axis of a composite spline at global parameter ``t``.

    ``t`` is spread evenly over the segments. ``t >= 1`` returns the final
    anchor exactly; ``t < 0`` extrapolates the first segment. Splines with
    fewer than two anchors degrade to the sole anchor value, or ``0.0``
    when empty.
    """

    points = spline.points if isinstance(spline, Spline) else tuple(spline)
    if axis not in AXES:
        raise ValueError(f"Unknown spline axis '{axis}'")
    if len(points) < 2:
        return points[0].value(axis) if points else 0.0

    segments = len(points) - 1
    raw_t = t * segments
    index = math.floor(raw_t)
    if index >= segments:
        return points[-1].value(axis)
    index = max(0, index)
    weight = raw_t - index

    start = points[index]
    end = points[index + 1]
    v0 = start.value(axis)
    v1 = v0 + start.outgoing(axis)
    v3 = end.value(axis)
    v2 = v3 + end.incoming(axis)
    return cubic_bezier(weight, v0, v1, v2, v3)


def spline_from_bezier_controls(controls: Sequence[Tuple[float, float]]) -> Spline:
    """Build a single-segment spline from four Bézier control points."""

    if len(controls) != 4:
        raise ValueError("Exactly four control points are required")
    (x0, y0), (x1, y1), (x2, y2), (x3, y3) = controls
    return Spline(
        (
            ControlPoint(x0, y0, cp2=Handle(x1 - x0, y1 - y0)),
            ControlPoint(x3, y3, cp1=Handle(x2 - x3, y2 - y3)),
        )
    )


def default_vertical_profile() -> Spline:
    """Profile sweeping from a bottom-centre base up to the top."""

    return spline_from_bezier_controls(((0.5, 0.0), (1.0, 0.5), (0.2, 0.8), (0.8, 1.0)))


def default_horizontal_shape() -> Spline:
    """S-shaped horizontal footprint spanning the full width."""

    return spline_from_bezier_controls(((0.0, 0.5), (0.2, 0.2), (0.8, 0.8), (1.0, 0.5)))
