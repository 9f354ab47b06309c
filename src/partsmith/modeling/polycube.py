"""Eight-corner polyhedra: boxes whose corners can be moved independently."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from partsmith.mesh import Mesh

from ._color import ColorLike
from .primitives import _BOX_FACES, make_polyhedron

# Corners 0-3 form the bottom ring and 4-7 the top ring, both counter-clockwise
# seen from +Z, with corner i+4 above corner i.
POLYCUBE_FACES = _BOX_FACES


def make_polycube(corners: Sequence[Sequence[float]], color: ColorLike | None = None) -> Mesh:
    pts = np.asarray(corners, dtype=float)
    if pts.shape != (8, 3):
        raise ValueError("make_polycube requires exactly eight (x, y, z) corners.")
    return make_polyhedron(pts, POLYCUBE_FACES, color=color)


def make_frustum_block(
    bottom_size: Sequence[float],
    top_size: Sequence[float],
    height: float,
    shift: Sequence[float] = (0.0, 0.0),
    color: ColorLike | None = None,
) -> Mesh:
    """Rectangular frustum: bottom centred on the origin, top offset by `shift` in XY."""

    bx, by = (float(v) / 2.0 for v in bottom_size)
    tx, ty = (float(v) / 2.0 for v in top_size)
    sx, sy = (float(v) for v in shift)
    corners = [
        (-bx, -by, 0.0),
        (bx, -by, 0.0),
        (bx, by, 0.0),
        (-bx, by, 0.0),
        (sx - tx, sy - ty, height),
        (sx + tx, sy - ty, height),
        (sx + tx, sy + ty, height),
        (sx - tx, sy + ty, height),
    ]
    return make_polycube(corners, color=color)


__all__ = ["POLYCUBE_FACES", "make_frustum_block", "make_polycube"]
