from __future__ import annotations

from partsmith.modeling import group, make_box, make_cone, make_cylinder, make_ngon, make_sphere


def build():
    return group(
        [
            make_box(size=(2.0, 2.0, 2.0), center=(0.0, 0.0, 1.0), color="#6ab0ff"),
            make_cylinder(radius=1.0, height=2.0, center=(3.0, 0.0, 1.0), color="#f58f7c"),
            make_cone(bottom_diameter=2.0, top_diameter=0.5, height=2.0, center=(6.0, 0.0, 1.0)),
            make_ngon(sides=6, radius=1.0, height=2.0, center=(9.0, 0.0, 1.0)),
            make_sphere(radius=1.0, center=(12.0, 0.0, 1.0), color=(250, 219, 95)),
        ]
    )
