from __future__ import annotations

import math
from typing import Sequence

from partsmith.mesh import Mesh

from ._color import ColorLike, set_mesh_color
from .csg import boolean_difference, boolean_union
from .primitives import make_box, make_cylinder


def _plate_positions(length: float, plate_thickness: float, spacing: float) -> list[float]:
    """X centres of plates spread evenly over [0, length]; both ends always get a plate."""

    span = length - plate_thickness
    if span <= 0 or spacing <= 0:
        return [length / 2.0]
    count = max(int(math.floor(span / spacing)) + 1, 2)
    step = span / (count - 1)
    return [plate_thickness / 2.0 + i * step for i in range(count)]


def _hole_centers(extent: float, hole_diameter: float) -> list[float]:
    """Centres of holes spaced two diameters apart with a diameter of margin at each end."""

    pitch = 2.0 * hole_diameter
    usable = extent - 2.0 * hole_diameter
    if usable < 0:
        return []
    count = int(math.floor(usable / pitch)) + 1
    start = (extent - (count - 1) * pitch) / 2.0
    return [start + i * pitch for i in range(count)]


def make_support(
    size: Sequence[float],
    plate_thickness: float = 0.8,
    spacing: float = 4.0,
    perforation: float = 0.0,
    cross_braces: bool = False,
    resolution: int = 16,
    color: ColorLike | None = None,
) -> Mesh:
    """Scaffold of thin YZ plates filling the box [0, sx] x [0, sy] x [0, sz].

    `perforation` is the diameter of a grid of holes punched along X through
    every plate (0 disables it). `cross_braces` adds rails along X tying the
    plates together at the top and bottom edges.
    """

    sx, sy, sz = (float(v) for v in size)
    plates = [
        make_box(size=(plate_thickness, sy, sz), center=(x, sy / 2.0, sz / 2.0))
        for x in _plate_positions(sx, plate_thickness, spacing)
    ]

    parts = list(plates)
    if cross_braces:
        rail = min(plate_thickness, sy / 2.0, sz / 2.0)
        for y in (rail / 2.0, sy - rail / 2.0):
            for z in (rail / 2.0, sz - rail / 2.0):
                parts.append(make_box(size=(sx, rail, rail), center=(sx / 2.0, y, z)))
    support = boolean_union(parts)

    if perforation > 0:
        # Keep the rails intact by leaving a plate_thickness band at the edges.
        margin = plate_thickness if cross_braces else 0.0
        ys = [margin + y for y in _hole_centers(sy - 2.0 * margin, perforation)]
        zs = [margin + z for z in _hole_centers(sz - 2.0 * margin, perforation)]
        holes = [
            make_cylinder(
                radius=perforation / 2.0,
                height=sx + 2.0,
                center=(sx / 2.0, y, z),
                direction=(1.0, 0.0, 0.0),
                resolution=resolution,
            )
            for y in ys
            for z in zs
        ]
        if holes:
            support = boolean_difference(support, holes)

    if color is not None:
        set_mesh_color(support, color)
    return support


__all__ = ["make_support"]
