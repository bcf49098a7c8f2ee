"""Tests for chart geometry and SVG output."""

from __future__ import annotations

from dataclasses import replace
import math

import pytest

from radial_chart import (
    CATEGORY_ARCS,
    ChartOptions,
    Point,
    axis_angles,
    cartesian_to_polar,
    describe_arc,
    dial_angle,
    dial_fill_path,
    polar_to_cartesian,
    project,
    render_svg,
)
from scoring_engine import DIRECT_AXES, Scores

CENTER = Point(275, 275)


def _uniform(value: float, adventure: float = 0) -> Scores:
    return Scores(
        energy=value,
        awareness=value,
        love=value,
        tribe=value,
        career=value,
        abundance=value,
        fitness=value,
        health=value,
        adventure=adventure,
    )


def _close(a: Point, b: Point) -> bool:
    return math.isclose(a.x, b.x, abs_tol=1e-9) and math.isclose(a.y, b.y, abs_tol=1e-9)


@pytest.mark.parametrize(
    "angle,expected",
    [
        (0, Point(275, 175)),
        (90, Point(375, 275)),
        (180, Point(275, 375)),
        (270, Point(175, 275)),
    ],
)
def test_polar_to_cartesian_compass_points(angle, expected):
    assert _close(polar_to_cartesian(CENTER, angle, 100), expected)


@pytest.mark.parametrize("angle", [0.0, 45.0, 90.0, 180.0, 270.0, 315.0])
def test_polar_round_trip(angle):
    back, r = cartesian_to_polar(CENTER, polar_to_cartesian(CENTER, angle, 80))
    diff = abs(back - angle) % 360.0
    assert min(diff, 360.0 - diff) < 1e-9
    assert math.isclose(r, 80)


def test_axes_straddle_twelve_o_clock():
    angles = dict(axis_angles())
    assert list(angles) == DIRECT_AXES
    assert angles["Energy"] == 337.5
    assert angles["Awareness"] == 22.5
    assert angles["Health"] == 292.5
    assert len(set(angles.values())) == 8


@pytest.mark.parametrize(
    "score,expected",
    [(1, 315.0), (4, 180.0), (7, 45.0), (0, 315.0), (8, 45.0), (6.5, 67.5)],
)
def test_dial_angle(score, expected):
    assert dial_angle(score) == expected


def test_dial_fill_absent_below_scale():
    assert dial_fill_path(CENTER, 230, 250, 0) is None
    assert dial_fill_path(CENTER, 230, 250, 0.5) is None
    assert project(_uniform(3, adventure=0)).dial.fill_path is None


@pytest.mark.parametrize("score,large_arc", [(7, "1"), (6, "1"), (5, "0"), (4, "0"), (1, "0")])
def test_dial_fill_flags(score, large_arc):
    tokens = dial_fill_path(CENTER, 230, 250, score).split()
    assert tokens[0] == "M"
    assert tokens[3] == "A"
    assert tokens[7] == large_arc
    assert tokens[8] == "0"
    assert tokens[11] == "L"
    assert tokens[14] == "A"
    assert tokens[18] == large_arc
    assert tokens[19] == "1"
    assert tokens[-1] == "Z"


def test_dial_fill_starts_at_score_one_anchor():
    tokens = dial_fill_path(CENTER, 230, 250, 4).split()
    anchor = polar_to_cartesian(CENTER, 315, 250)
    assert tokens[1] == f"{anchor.x:.2f}"
    assert tokens[2] == f"{anchor.y:.2f}"
    end = polar_to_cartesian(CENTER, 180, 250)
    assert tokens[9] == f"{end.x:.2f}"
    assert tokens[10] == f"{end.y:.2f}"


def test_describe_arc_flags():
    assert describe_arc(CENTER, 100, -45, 45).split()[7] == "0"
    assert describe_arc(CENTER, 100, 0, 270).split()[7] == "1"
    assert describe_arc(CENTER, 100, 0, 270).split()[8] == "1"


def test_previous_profile_adds_a_polygon():
    single = project(_uniform(3))
    double = project(_uniform(3), previous_scores=_uniform(5))

    assert [p.kind for p in single.polygons] == ["current"]
    assert [p.kind for p in double.polygons] == ["previous", "current"]
    assert single.previous is None
    assert len(double.previous.points) == 8
    assert double.current == single.current


def test_project_is_deterministic():
    scores = Scores(energy=3, love=6, health=1, adventure=4.5)
    previous = _uniform(2, adventure=2)
    assert project(scores, previous) == project(scores, previous)
    assert render_svg(project(scores, previous)) == render_svg(project(scores, previous))


def test_vertex_radius_is_score_fraction():
    options = ChartOptions()
    geometry = project(Scores(energy=7, awareness=3.5, love=0), options=options)
    radii = [cartesian_to_polar(geometry.center, p)[1] for p in geometry.current.points]

    assert math.isclose(radii[0], options.radius)
    assert math.isclose(radii[1], options.radius / 2)
    assert math.isclose(radii[2], 0, abs_tol=1e-9)


def test_vertices_sit_on_their_axes():
    geometry = project(_uniform(4))
    for axis, point in zip(geometry.axes, geometry.current.points):
        angle, _ = cartesian_to_polar(geometry.center, point)
        diff = abs(angle - axis.angle) % 360.0
        assert min(diff, 360.0 - diff) < 1e-9


def test_direct_axes_are_not_clamped():
    options = ChartOptions()
    geometry = project(Scores(energy=14), options=options)
    _, r = cartesian_to_polar(geometry.center, geometry.current.points[0])
    assert math.isclose(r, 2 * options.radius)


def test_rings_and_radii():
    geometry = project(Scores())
    assert geometry.center == Point(275, 275)
    assert geometry.radius == 165
    assert len(geometry.grid_rings) == 7
    assert math.isclose(geometry.grid_rings[-1], 165)
    assert geometry.category_rings == (190, 220)
    assert geometry.dial.inner_radius == 230
    assert geometry.dial.outer_radius == 250


def test_dial_ticks():
    ticks = project(Scores()).dial.ticks
    assert [t.value for t in ticks] == list(range(1, 8))
    assert [t.angle for t in ticks] == [315, 270, 225, 180, 135, 90, 45]
    _, r = cartesian_to_polar(CENTER, ticks[0].point)
    assert math.isclose(r, 262)


def test_category_arcs():
    arcs = project(Scores()).category_arcs
    assert [a.text for a in arcs] == [text for _, text, _, _ in CATEGORY_ARCS]
    assert arcs[0].text == "CONSCIOUSNESS"
    for arc in arcs:
        assert arc.path.split()[7] == "0"


def test_corporate_labels():
    labels = {a.name: a.label for a in project(Scores(), options=ChartOptions(chart_type="corporate")).axes}
    assert labels["Love"] == "Culture"
    assert labels["Career"] == "Engagement"
    assert labels["Abundance"] == "Performance"
    assert labels["Fitness"] == "Wellness"
    assert labels["Energy"] == "Energy"

    personal = {a.name: a.label for a in project(Scores()).axes}
    assert personal["Love"] == "Love"


def test_accent_color_follows_chart_type():
    assert project(Scores()).accent_color == "#f97316"
    assert project(Scores(), options=ChartOptions(chart_type="corporate")).accent_color == "#3b82f6"


def test_render_svg_previous_is_dashed():
    plain = render_svg(project(_uniform(3, adventure=4)))
    compared = render_svg(project(_uniform(3, adventure=4), previous_scores=_uniform(2)))

    assert "stroke-dasharray" not in plain
    assert "stroke-dasharray" in compared
    assert plain.startswith("<svg")
    assert plain.endswith("</svg>")
    assert "ADVENTURE" in plain
    assert plain.count("<polygon") == 1
    assert compared.count("<polygon") == 2


def test_render_svg_skips_empty_dial_fill():
    geometry = project(Scores())
    svg = render_svg(geometry)
    assert 'opacity="0.8"' not in svg
    assert 'opacity="0.8"' in render_svg(project(Scores(adventure=3)))


def test_render_svg_escapes_labels():
    geometry = project(Scores())
    axes = (replace(geometry.axes[0], label="R&D <Team>"),) + geometry.axes[1:]
    svg = render_svg(replace(geometry, axes=axes))
    assert "R&amp;D &lt;Team&gt;" in svg
    assert "<Team>" not in svg
