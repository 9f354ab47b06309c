"""CSG union example."""

from __future__ import annotations

from partsmith.modeling import boolean_union, make_box, make_cylinder


def build():
    box = make_box(size=(2, 2, 1))
    cyl = make_cylinder(radius=0.6, height=1.5)
    return boolean_union([box, cyl])
