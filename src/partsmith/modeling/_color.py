from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from partsmith.mesh import Mesh

ColorLike = Sequence[float] | str


def set_mesh_color(mesh: Mesh, color: ColorLike) -> Mesh:
    rgb, alpha = _normalize_color(color)
    mesh.color = (rgb[0], rgb[1], rgb[2], alpha)
    return mesh


def transfer_mesh_color(target: Mesh, source: Mesh) -> Mesh:
    if source.color is not None:
        target.color = source.color
    return target


def _normalize_color(color: ColorLike) -> Tuple[Tuple[float, float, float], float]:
    if isinstance(color, str):
        import pyvista as pv

        col = pv.Color(color)
        rgb = tuple(col.float_rgb)
        alpha = 1.0
        return rgb, alpha

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    rgb = tuple(float(c) for c in arr[:3])
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return rgb, alpha
