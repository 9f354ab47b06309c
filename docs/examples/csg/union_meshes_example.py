"""Union a named collection of parts in one call."""

from __future__ import annotations

from partsmith.modeling import make_box, make_cylinder, make_polygon_prism, union_meshes


def build():
    parts = {
        "base": make_box(size=(12.0, 8.0, 2.0), center=(0.0, 0.0, 1.0)),
        "post": make_cylinder(radius=1.5, height=6.0, center=(-3.0, 0.0, 4.0)),
        "rib": make_polygon_prism([(0.0, -1.0), (5.0, -1.0), (0.0, 4.0)], height=1.0, center=(0.0, 0.0, 1.9)),
    }
    return union_meshes(parts)
