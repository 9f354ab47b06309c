from __future__ import annotations

import itertools
from typing import Sequence

import numpy as np

from partsmith.mesh import Mesh

from ._color import ColorLike, set_mesh_color
from .csg import boolean_difference, hull
from .primitives import make_box, make_cylinder, make_sphere
from .transform import mirror, translate

_EPS = 0.01


def make_fillet_cube(
    size: Sequence[float],
    radius: float,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    resolution: int = 32,
    color: ColorLike | None = None,
) -> Mesh:
    """Box with every edge and corner rounded: the hull of eight corner spheres."""

    sx, sy, sz = (float(v) for v in size)
    radius = min(float(radius), sx / 2.0, sy / 2.0, sz / 2.0)
    if radius <= 0:
        return make_box(size=size, center=center, color=color)

    offsets = np.array([sx / 2.0 - radius, sy / 2.0 - radius, sz / 2.0 - radius])
    origin = np.asarray(center, dtype=float).reshape(3)
    spheres = [
        make_sphere(radius=radius, center=origin + offsets * np.array(signs), resolution=resolution)
        for signs in itertools.product((-1.0, 1.0), repeat=3)
    ]
    cube = hull(spheres)
    if color is not None:
        set_mesh_color(cube, color)
    return cube


def make_edge_fillet_cutter(length: float, radius: float, resolution: int = 32) -> Mesh:
    """Material to remove to round a 90 degree edge lying on the Z axis.

    The solid being rounded is assumed to occupy x <= 0, y <= 0; the cutter
    spans z in [-length/2, length/2] plus a small overshoot.
    """

    block = make_box(
        size=(radius + _EPS, radius + _EPS, length + 2.0 * _EPS),
        center=(-(radius - _EPS) / 2.0, -(radius - _EPS) / 2.0, 0.0),
    )
    round_ = make_cylinder(
        radius=radius,
        height=length + 4.0 * _EPS,
        center=(-radius, -radius, 0.0),
        resolution=resolution,
    )
    return boolean_difference(block, [round_])


def make_corner_fillet_cutter(radius: float, resolution: int = 32) -> Mesh:
    """Material to remove to round a corner at the origin of a solid in the negative octant."""

    block = make_box(
        size=(radius + _EPS,) * 3,
        center=(-(radius - _EPS) / 2.0,) * 3,
    )
    ball = make_sphere(radius=radius, center=(-radius, -radius, -radius), resolution=resolution)
    return boolean_difference(block, [ball])


def fillet_box_edges(
    mesh: Mesh,
    size: Sequence[float],
    radius: float,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    resolution: int = 32,
) -> Mesh:
    """Round the four vertical edges of an axis-aligned box of `size` at `center`."""

    if radius <= 0:
        return mesh.copy()
    sx, sy, sz = (float(v) for v in size)
    cx, cy, cz = (float(v) for v in center)
    base = make_edge_fillet_cutter(sz, radius, resolution=resolution)
    cutters = []
    for xs, ys in itertools.product((-1.0, 1.0), repeat=2):
        cutter = base
        if xs < 0:
            cutter = mirror(cutter, (1.0, 0.0, 0.0))
        if ys < 0:
            cutter = mirror(cutter, (0.0, 1.0, 0.0))
        cutters.append(translate(cutter, (cx + xs * sx / 2.0, cy + ys * sy / 2.0, cz)))
    return boolean_difference(mesh, cutters)


__all__ = [
    "fillet_box_edges",
    "make_corner_fillet_cutter",
    "make_edge_fillet_cutter",
    "make_fillet_cube",
]
