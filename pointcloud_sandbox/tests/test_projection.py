"""Tests for the shared model-view-projection pipeline."""
from __future__ import annotations

import math

import pytest

from pointcloud_sandbox.camera import ViewState, Viewport
from pointcloud_sandbox.projection import (
    ProjectionPipeline,
    ScreenPoint,
    sort_back_to_front,
    visible_points,
)
from pointcloud_sandbox.surface import Point3D


def _pipeline(**view_overrides) -> ProjectionPipeline:
    return ProjectionPipeline(view=ViewState(**view_overrides), viewport=Viewport(800, 600))


def _point(x: float, y: float, z: float, color: str = "#ffffff") -> Point3D:
    return Point3D(x=x, y=y, z=z, color=color)


@pytest.mark.parametrize("depth", [0.0, 250.0, -400.0])
def test_optical_axis_projects_to_viewport_center(depth):
    (projected,) = _pipeline().project([_point(0.0, 0.0, depth)])
    assert projected.x == pytest.approx(400.0)
    assert projected.y == pytest.approx(300.0)


def test_radius_follows_camera_distance_and_zoom():
    (unzoomed,) = _pipeline().project([_point(0.0, 0.0, 0.0)], base_radius=2.0)
    (zoomed,) = _pipeline(zoom=2.0).project([_point(0.0, 0.0, 0.0)], base_radius=2.0)
    assert unzoomed.w == pytest.approx(1000.0)
    assert unzoomed.radius == pytest.approx(2.0)
    assert zoomed.radius == pytest.approx(4.0)


def test_nearer_points_are_larger_and_shallower():
    near, far = _pipeline().project([_point(0.0, 0.0, 300.0), _point(0.0, 0.0, -300.0)])
    assert near.radius > far.radius
    assert near.depth < far.depth


def test_positive_y_is_drawn_above_center():
    (projected,) = _pipeline().project([_point(0.0, 100.0, 0.0)])
    assert projected.y < 300.0


# //1.- Off-axis points land where the field of view and aspect ratio put them.
def test_off_axis_points_map_to_absolute_pixels():
    focal = 1.0 / math.tan(math.radians(60.0) / 2.0)
    right, up = _pipeline().project([_point(100.0, 0.0, 0.0), _point(0.0, 100.0, 0.0)])
    assert right.x == pytest.approx((focal / (4.0 / 3.0) * 0.1 * 0.5 + 0.5) * 800.0)
    assert right.x == pytest.approx(451.96, abs=0.01)
    assert right.y == pytest.approx(300.0)
    assert up.x == pytest.approx(400.0)
    assert up.y == pytest.approx((1.0 - (focal * 0.1 * 0.5 + 0.5)) * 600.0)
    assert up.y == pytest.approx(248.04, abs=0.01)


def test_pan_shifts_screen_position():
    (projected,) = _pipeline(offset_x=50.0).project([_point(0.0, 0.0, 0.0)])
    assert projected.x > 400.0


def test_rotation_y_swings_x_axis_onto_optical_axis():
    (projected,) = _pipeline(angle_y=math.pi / 2).project([_point(100.0, 0.0, 0.0)])
    assert projected.x == pytest.approx(400.0)
    assert projected.w == pytest.approx(1100.0)


def test_points_at_camera_plane_and_behind_are_dropped():
    points = [
        _point(0.0, 0.0, 0.0),
        _point(0.0, 0.0, 1000.0),
        _point(0.0, 0.0, 2000.0),
        _point(0.0, 0.0, -20000.0),
    ]
    projected = _pipeline().project(points)
    assert [point.index for point in projected] == [0]


def test_projection_keeps_source_order_and_color():
    points = [_point(-50.0, 0.0, 0.0, "#ff0000"), _point(50.0, 0.0, 0.0, "#00ff00")]
    projected = _pipeline().project(points)
    assert [point.color for point in projected] == ["#ff0000", "#00ff00"]
    assert projected[0].x < projected[1].x


def test_empty_cloud_projects_to_nothing():
    assert _pipeline().project([]) == []


def _screen(depth: float, index: int, radius: float = 1.0) -> ScreenPoint:
    return ScreenPoint(x=0.0, y=0.0, depth=depth, w=1.0, radius=radius, color="#ffffff", index=index)


def test_depth_sort_is_farthest_first():
    ordered = sort_back_to_front([_screen(0.2, 0), _screen(0.8, 1), _screen(0.5, 2)])
    assert [point.depth for point in ordered] == [0.8, 0.5, 0.2]


def test_depth_sort_is_stable_for_ties():
    ordered = sort_back_to_front([_screen(0.5, 0), _screen(0.9, 1), _screen(0.5, 2)])
    assert [point.index for point in ordered] == [1, 0, 2]


def test_small_points_are_culled():
    kept = visible_points([_screen(0.5, 0, radius=0.05), _screen(0.5, 1, radius=0.2)], min_radius=0.1)
    assert [point.index for point in kept] == [1]


def test_render_list_combines_projection_sort_and_culling():
    points = [_point(0.0, 0.0, 300.0), _point(0.0, 0.0, -300.0), _point(0.0, 0.0, 2000.0)]
    ordered = _pipeline().render_list(points, base_radius=1.0)
    assert [point.index for point in ordered] == [1, 0]


def test_pipeline_does_not_mutate_view():
    view = ViewState(angle_x=0.2, angle_y=0.4, zoom=1.5)
    pipeline = ProjectionPipeline(view=view, viewport=Viewport(640, 480))
    pipeline.project([_point(1.0, 2.0, 3.0)])
    assert view == ViewState(angle_x=0.2, angle_y=0.4, zoom=1.5)


@pytest.mark.parametrize(
    "overrides",
    [{"zoom": 0.0}, {"near": 0.0}, {"near": 10.0, "far": 5.0}, {"field_of_view": 0.0}],
)
def test_invalid_view_state_is_rejected(overrides):
    with pytest.raises(ValueError):
        ViewState(**overrides)


def test_invalid_viewport_is_rejected():
    with pytest.raises(ValueError):
        Viewport(0, 600)
