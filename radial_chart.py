#!/usr/bin/env python3
"""Radial performance-model chart: geometry projection and SVG rendering.

Angles follow the chart convention used everywhere in this module: 0 degrees
is 12 o'clock and angles grow clockwise. ``polar_to_cartesian`` and
``cartesian_to_polar`` are the only places that convert to screen
coordinates (y grows downwards), so every axis, arc and dial position goes
through them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html
import math
from typing import List, Optional, Tuple

from scoring_engine import DERIVED_AXIS, DIRECT_AXES, Scores

LEVELS = 7
DIAL_MIN = 1
DIAL_MAX = 7
DIAL_STEP = 45.0
DIAL_START_ANGLE = 315.0
AXIS_STEP = 45.0
AXIS_OFFSET = -22.5

CATEGORY_ARCS = [
    ("consciousnessPath", "CONSCIOUSNESS", -45.0, 45.0),
    ("connectionPath", "CONNECTION", 45.0, 135.0),
    ("contributionPath", "CONTRIBUTION", 135.0, 225.0),
    ("commitmentPath", "COMMITMENT", 225.0, 315.0),
]

CORPORATE_LABELS = {
    "Love": "Culture",
    "Career": "Engagement",
    "Abundance": "Performance",
    "Fitness": "Wellness",
}

ACCENT_COLORS = {
    "personal": "#f97316",
    "corporate": "#3b82f6",
}
FILL_COLORS = {
    "personal": "rgba(249, 115, 22, 0.3)",
    "corporate": "rgba(59, 130, 246, 0.3)",
}
PREVIOUS_COLOR = "#94a3b8"
GRID_COLOR = "#374151"
TRACK_COLOR = "#4B5563"
TEXT_COLOR = "#D1D5DB"
BACKGROUND_COLOR = "#1F2937"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class ChartOptions:
    levels: int = LEVELS
    width: int = 550
    height: int = 550
    chart_type: str = "personal"

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    @property
    def radius(self) -> float:
        return self.width / 2 - 110


@dataclass(frozen=True)
class Axis:
    name: str
    label: str
    angle: float
    end: Point
    label_point: Point


@dataclass(frozen=True)
class Polygon:
    kind: str
    points: Tuple[Point, ...]

    @property
    def svg_points(self) -> str:
        return " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in self.points)


@dataclass(frozen=True)
class ArcLabel:
    id: str
    text: str
    path: str


@dataclass(frozen=True)
class DialTick:
    value: int
    angle: float
    point: Point


@dataclass(frozen=True)
class Dial:
    score: float
    inner_radius: float
    outer_radius: float
    start_angle: float
    fill_angle: float
    fill_path: Optional[str]
    ticks: Tuple[DialTick, ...]
    label: ArcLabel


@dataclass(frozen=True)
class ChartGeometry:
    options: ChartOptions
    center: Point
    radius: float
    axes: Tuple[Axis, ...]
    grid_rings: Tuple[float, ...]
    category_rings: Tuple[float, ...]
    category_arcs: Tuple[ArcLabel, ...]
    dial: Dial
    polygons: Tuple[Polygon, ...] = field(default_factory=tuple)

    @property
    def accent_color(self) -> str:
        return ACCENT_COLORS.get(self.options.chart_type, ACCENT_COLORS["personal"])

    @property
    def current(self) -> Polygon:
        return next(p for p in self.polygons if p.kind == "current")

    @property
    def previous(self) -> Optional[Polygon]:
        return next((p for p in self.polygons if p.kind == "previous"), None)


def _fmt(value: float) -> str:
    text = f"{value:.2f}"
    return "0.00" if text == "-0.00" else text


def polar_to_cartesian(center: Point, angle: float, r: float) -> Point:
    radians = math.radians(angle - 90.0)
    return Point(center.x + r * math.cos(radians), center.y + r * math.sin(radians))


def cartesian_to_polar(center: Point, point: Point) -> Tuple[float, float]:
    dx = point.x - center.x
    dy = point.y - center.y
    angle = (math.degrees(math.atan2(dy, dx)) + 90.0) % 360.0
    return angle, math.hypot(dx, dy)


def describe_arc(center: Point, r: float, start_angle: float, end_angle: float) -> str:
    """Clockwise SVG arc from ``start_angle`` to ``end_angle``."""
    start = polar_to_cartesian(center, start_angle, r)
    end = polar_to_cartesian(center, end_angle, r)
    angle_range = (end_angle - start_angle) % 360.0
    large_arc = 1 if angle_range > 180 else 0
    return (
        f"M {_fmt(start.x)} {_fmt(start.y)} "
        f"A {_fmt(r)} {_fmt(r)} 0 {large_arc} 1 {_fmt(end.x)} {_fmt(end.y)}"
    )


def clamp_dial_score(score: float) -> float:
    return max(DIAL_MIN, min(DIAL_MAX, score))


def dial_angle(score: float) -> float:
    """Score 1 sits at 315 degrees, 4 at 180 and 7 at 45."""
    return 360.0 - DIAL_STEP * clamp_dial_score(score)


def dial_sweep(score: float) -> float:
    end = dial_angle(score)
    if DIAL_START_ANGLE >= end:
        return DIAL_START_ANGLE - end
    return DIAL_START_ANGLE + 360.0 - end


def dial_fill_path(center: Point, inner_radius: float, outer_radius: float, score: float) -> Optional[str]:
    """Closed ring segment covering the dial from score 1 to ``score``.

    The outer edge runs from the score-1 anchor to the endpoint, a radial
    segment drops to the inner edge, the inner arc returns to the anchor and
    the path closes. Returns ``None`` below the start of the scale.
    """
    if score < DIAL_MIN:
        return None
    end_angle = dial_angle(score)
    large_arc = 1 if dial_sweep(score) > 180 else 0

    start_outer = polar_to_cartesian(center, DIAL_START_ANGLE, outer_radius)
    end_outer = polar_to_cartesian(center, end_angle, outer_radius)
    start_inner = polar_to_cartesian(center, DIAL_START_ANGLE, inner_radius)
    end_inner = polar_to_cartesian(center, end_angle, inner_radius)

    return (
        f"M {_fmt(start_outer.x)} {_fmt(start_outer.y)} "
        f"A {_fmt(outer_radius)} {_fmt(outer_radius)} 0 {large_arc} 0 {_fmt(end_outer.x)} {_fmt(end_outer.y)} "
        f"L {_fmt(end_inner.x)} {_fmt(end_inner.y)} "
        f"A {_fmt(inner_radius)} {_fmt(inner_radius)} 0 {large_arc} 1 {_fmt(start_inner.x)} {_fmt(start_inner.y)} "
        "Z"
    )


def axis_angles() -> List[Tuple[str, float]]:
    return [(name, (AXIS_OFFSET + AXIS_STEP * i) % 360.0) for i, name in enumerate(DIRECT_AXES)]


def axis_label(name: str, chart_type: str) -> str:
    if chart_type != "corporate":
        return name
    return CORPORATE_LABELS.get(name, name)


def score_polygon(kind: str, scores: Scores, options: ChartOptions) -> Polygon:
    center = options.center
    points = tuple(
        polar_to_cartesian(center, angle, (scores.value(name) / options.levels) * options.radius)
        for name, angle in axis_angles()
    )
    return Polygon(kind=kind, points=points)


def project(
    scores: Scores,
    previous_scores: Optional[Scores] = None,
    options: Optional[ChartOptions] = None,
) -> ChartGeometry:
    options = options or ChartOptions()
    center = options.center
    radius = options.radius

    core_label_radius = radius + 15
    category_label_radius = radius + 40
    inner_radius = radius + 65
    outer_radius = radius + 85

    axes = tuple(
        Axis(
            name=name,
            label=axis_label(name, options.chart_type),
            angle=angle,
            end=polar_to_cartesian(center, angle, radius),
            label_point=polar_to_cartesian(center, angle, core_label_radius),
        )
        for name, angle in axis_angles()
    )

    category_arcs = tuple(
        ArcLabel(id=arc_id, text=text, path=describe_arc(center, category_label_radius, start, end))
        for arc_id, text, start, end in CATEGORY_ARCS
    )

    adventure = scores.value(DERIVED_AXIS)
    dial = Dial(
        score=adventure,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        start_angle=DIAL_START_ANGLE,
        fill_angle=dial_angle(adventure),
        fill_path=dial_fill_path(center, inner_radius, outer_radius, adventure),
        ticks=tuple(
            DialTick(
                value=value,
                angle=dial_angle(value),
                point=polar_to_cartesian(center, dial_angle(value), outer_radius + 12),
            )
            for value in range(DIAL_MIN, DIAL_MAX + 1)
        ),
        label=ArcLabel(
            id="adventureTextPath",
            text=DERIVED_AXIS.upper(),
            path=describe_arc(center, (inner_radius + outer_radius) / 2, -60.0, 60.0),
        ),
    )

    polygons = []
    if previous_scores is not None:
        polygons.append(score_polygon("previous", previous_scores, options))
    polygons.append(score_polygon("current", scores, options))

    return ChartGeometry(
        options=options,
        center=center,
        radius=radius,
        axes=axes,
        grid_rings=tuple(radius * level / options.levels for level in range(1, options.levels + 1)),
        category_rings=(radius + 25, radius + 55),
        category_arcs=category_arcs,
        dial=dial,
        polygons=tuple(polygons),
    )


def _circle(center: Point, r: float, fill: str = "none", stroke: str = TRACK_COLOR) -> str:
    return (
        f'<circle cx="{_fmt(center.x)}" cy="{_fmt(center.y)}" r="{_fmt(r)}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="1" />'
    )


def render_svg(geometry: ChartGeometry) -> str:
    options = geometry.options
    center = geometry.center
    accent = geometry.accent_color
    dial = geometry.dial
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {options.width} {options.height}" '
        'role="img" aria-label="Conscious Human Performance Model Chart">',
        "<defs>",
    ]
    for arc in geometry.category_arcs + (dial.label,):
        parts.append(f'<path id="{arc.id}" d="{arc.path}" />')
    parts.append("</defs>")

    # Adventure dial sits outside the category rings.
    parts.append(_circle(center, dial.outer_radius))
    parts.append(_circle(center, dial.inner_radius, fill=BACKGROUND_COLOR))
    if dial.fill_path:
        parts.append(f'<path d="{dial.fill_path}" fill="{accent}" opacity="0.8" />')
    parts.append(
        f'<text dy="6"><textPath href="#{dial.label.id}" startOffset="50%" text-anchor="middle" '
        f'fill="{accent}" font-size="18" font-weight="bold" letter-spacing="0.1em">{dial.label.text}</textPath></text>'
    )
    for tick in dial.ticks:
        parts.append(
            f'<text x="{_fmt(tick.point.x)}" y="{_fmt(tick.point.y)}" text-anchor="middle" dy="0.3em" '
            f'fill="{TEXT_COLOR}" font-size="12">{tick.value}</text>'
        )

    for ring in geometry.grid_rings:
        parts.append(_circle(center, ring, stroke=GRID_COLOR))
    for ring in geometry.category_rings:
        parts.append(_circle(center, ring))

    parts.append(f'<text fill="{TEXT_COLOR}" font-size="14" font-weight="500" letter-spacing="0.05em">')
    for arc in geometry.category_arcs:
        parts.append(f'<textPath href="#{arc.id}" startOffset="50%" text-anchor="middle">{arc.text}</textPath>')
    parts.append("</text>")

    for axis in geometry.axes:
        parts.append(
            f'<line x1="{_fmt(center.x)}" y1="{_fmt(center.y)}" x2="{_fmt(axis.end.x)}" y2="{_fmt(axis.end.y)}" '
            f'stroke="{TRACK_COLOR}" stroke-width="1" />'
        )
        parts.append(
            f'<text x="{_fmt(axis.label_point.x)}" y="{_fmt(axis.label_point.y)}" dy="0.3em" text-anchor="middle" '
            f'fill="{TEXT_COLOR}" font-size="12">{html.escape(axis.label)}</text>'
        )
    parts.append(f'<circle cx="{_fmt(center.x)}" cy="{_fmt(center.y)}" r="3" fill="{accent}" />')

    # Previous profile is drawn underneath the current one.
    previous = geometry.previous
    if previous is not None:
        parts.append(
            f'<polygon points="{previous.svg_points}" fill="none" stroke="{PREVIOUS_COLOR}" stroke-width="2" '
            'stroke-dasharray="5,5" opacity="0.7" />'
        )
        for point in previous.points:
            parts.append(f'<circle cx="{_fmt(point.x)}" cy="{_fmt(point.y)}" r="3" fill="{PREVIOUS_COLOR}" />')

    current = geometry.current
    fill = FILL_COLORS.get(options.chart_type, FILL_COLORS["personal"])
    parts.append(f'<polygon points="{current.svg_points}" fill="{fill}" stroke="{accent}" stroke-width="3" />')
    for point in current.points:
        parts.append(
            f'<circle cx="{_fmt(point.x)}" cy="{_fmt(point.y)}" r="5" fill="{accent}" '
            f'stroke="{BACKGROUND_COLOR}" stroke-width="1" />'
        )

    parts.append("</svg>")
    return "\n".join(parts)
