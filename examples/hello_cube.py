"""Example partsmith model to exercise the previewer."""

from __future__ import annotations

from partsmith.modeling import boolean_difference, make_box, make_cylinder


def build():
    """Compose a cube with a bored diagonal to exercise the previewer."""

    cube = make_box(size=(12, 12, 12))
    bore = make_cylinder(radius=4, height=24, direction=(1, 1, 0), resolution=64)
    return boolean_difference(cube, [bore])
