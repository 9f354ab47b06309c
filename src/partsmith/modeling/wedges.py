from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from partsmith.mesh import Mesh, empty_mesh

from .csg import boolean_difference, boolean_intersection
from .primitives import make_cylinder, make_polygon_prism


def make_wedge(
    radius: float,
    height: float,
    angle_deg: float,
    *,
    start_deg: float = 0.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    resolution: int = 64,
) -> Mesh:
    """Pie-slice prism around +Z from start_deg sweeping angle_deg counter-clockwise.

    The base sits on center's Z plane. A sweep of 360 degrees or more gives a
    full cylinder.
    """

    if angle_deg >= 360.0:
        cx, cy, cz = (float(v) for v in center)
        return make_cylinder(radius=radius, height=height, center=(cx, cy, cz + height / 2.0), resolution=resolution)

    steps = max(1, int(math.ceil(angle_deg / 360.0 * resolution)))
    angles = np.radians(start_deg + np.linspace(0.0, angle_deg, steps + 1))
    arc = np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])
    points = np.vstack([[0.0, 0.0], arc]) + np.asarray(center, dtype=float)[:2]
    base = (0.0, 0.0, float(center[2]))
    return make_polygon_prism(points, height=height, center=base)


def wedge_trim(mesh: Mesh, start_deg: float, end_deg: float, keep: bool = False, resolution: int = 64) -> Mesh:
    """Remove (or with keep=True, retain) the angular sector [start_deg, end_deg] around Z.

    Only a span of 360 degrees or more covers the full turn; equal angles name
    an empty sector.
    """

    if mesh.is_empty:
        return mesh.copy()
    span = end_deg - start_deg
    sweep = 360.0 if span >= 360.0 else span % 360.0
    if sweep == 0.0:
        return empty_mesh() if keep else mesh.copy()

    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    reach = max(math.hypot(x, y) for x in (xmin, xmax) for y in (ymin, ymax)) * 1.5 + 1.0
    wedge = make_wedge(
        reach,
        (zmax - zmin) + 2.0,
        sweep,
        start_deg=start_deg,
        center=(0.0, 0.0, zmin - 1.0),
        resolution=resolution,
    )
    if keep:
        return boolean_intersection([mesh, wedge])
    if sweep >= 360.0:
        return empty_mesh()
    return boolean_difference(mesh, [wedge])


__all__ = ["make_wedge", "wedge_trim"]
