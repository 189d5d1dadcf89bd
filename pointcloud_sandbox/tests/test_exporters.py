"""Tests for the SVG and OBJ exporters."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from pointcloud_sandbox.camera import ViewState, Viewport
from pointcloud_sandbox.exporters import OBJ_HEADER, render_obj, render_svg, write_obj, write_svg
from pointcloud_sandbox.projection import ProjectionPipeline
from pointcloud_sandbox.surface import Point3D

NS = {"svg": "http://www.w3.org/2000/svg"}


def test_obj_line_format_for_single_point():
    text = render_obj([Point3D(x=1, y=2, z=3, color="#ff0000")])
    assert text.splitlines() == [OBJ_HEADER, "v 1.0000 2.0000 3.0000 1.0000 0.0000 0.0000"]


def test_obj_prints_negative_zero_as_zero():
    text = render_obj([Point3D(x=-0.0, y=-0.0, z=0.123456, color="#336699")])
    assert text.splitlines()[1] == "v 0.0000 0.0000 0.1235 0.2000 0.4000 0.6000"


def test_obj_rounds_exact_ties_away_from_zero():
    text = render_obj([Point3D(x=0.03125, y=-0.03125, z=0.5, color="#000000")])
    assert text.splitlines()[1] == "v 0.0313 -0.0313 0.5000 0.0000 0.0000 0.0000"


def test_obj_with_empty_cloud_only_has_header():
    assert render_obj([]) == OBJ_HEADER + "\n"


def _cloud():
    return [
        Point3D(x=0.0, y=0.0, z=300.0, color="#ff0000"),
        Point3D(x=0.0, y=0.0, z=-300.0, color="#00ff00"),
        Point3D(x=0.0, y=0.0, z=2000.0, color="#0000ff"),
    ]


def test_svg_has_viewport_sized_root_and_background():
    root = ET.fromstring(render_svg(_cloud(), ViewState(), Viewport(320, 240), background="#112233"))
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    assert root.get("width") == "320"
    assert root.get("height") == "240"
    assert root.get("viewBox") == "0 0 320 240"
    assert "#112233" in root.get("style")
    rect = root.find("svg:rect", NS)
    assert rect is not None and rect.get("fill") == "#112233"


def test_svg_transparent_background_omits_rect():
    root = ET.fromstring(render_svg(_cloud(), ViewState(), Viewport(320, 240), transparent=True))
    assert root.find("svg:rect", NS) is None
    assert root.get("style") is None


def test_svg_circles_are_back_to_front_and_clipped():
    root = ET.fromstring(render_svg(_cloud(), ViewState(), Viewport(320, 240), base_radius=2.0))
    circles = root.findall("svg:g/svg:circle", NS)
    assert [circle.get("fill") for circle in circles] == ["#00ff00", "#ff0000"]
    assert root.find("svg:g", NS).get("id") == "point-cloud"


def test_svg_matches_projection_pipeline():
    view = ViewState(angle_x=0.3, angle_y=-0.7, zoom=1.3, offset_x=12.0, offset_y=-4.0)
    viewport = Viewport(640, 480)
    points = [Point3D(x=float(i * 20 - 60), y=float(i * 7), z=float(i * -15), color="#abcdef") for i in range(7)]
    expected = ProjectionPipeline(view=view, viewport=viewport).render_list(points, base_radius=1.5)
    root = ET.fromstring(render_svg(points, view, viewport, base_radius=1.5))
    circles = root.findall("svg:g/svg:circle", NS)
    assert len(circles) == len(expected)
    for circle, screen in zip(circles, expected):
        assert float(circle.get("cx")) == pytest.approx(screen.x, abs=0.006)
        assert float(circle.get("cy")) == pytest.approx(screen.y, abs=0.006)
        assert float(circle.get("r")) == pytest.approx(screen.radius, abs=0.006)


def test_svg_skips_points_below_visible_radius():
    root = ET.fromstring(
        render_svg(_cloud(), ViewState(), Viewport(320, 240), base_radius=0.001, min_radius=0.1)
    )
    assert root.findall("svg:g/svg:circle", NS) == []


def test_writers_create_files(tmp_path: Path):
    points = _cloud()
    obj_path = write_obj(tmp_path / "cloud.obj", points)
    svg_path = write_svg(tmp_path / "cloud.svg", points, ViewState(), Viewport(100, 100))
    assert obj_path.read_text(encoding="utf-8").startswith(OBJ_HEADER)
    assert svg_path.read_text(encoding="utf-8").startswith("<svg")
